"""
生成结果记录仓库
负责generated_images表的写入与查询
"""

from datetime import datetime
from typing import List, Optional, Sequence

from app.models.generated_image import GeneratedImage, GenerationStatus
from app.repositories.base import BaseRepository


class GeneratedImageRepository(BaseRepository):
    """生成结果记录仓库"""

    @property
    def model(self):
        return GeneratedImage

    async def create_record(
        self,
        record_id: str,
        user_id: str,
        original_image_path: str,
        prompts: Sequence[str],
        generated_image_urls: List[str],
        created_at: datetime,
        category: Optional[str] = None,
        custom_prompt: Optional[str] = None,
    ) -> GeneratedImage:
        """
        写入一次生成请求的汇总记录

        status和generated_count由URL列表推导，不接受外部传入。

        Args:
            record_id: 预先生成的记录ID
            user_id: 调用方ID
            original_image_path: 原图存储路径
            prompts: 完整提示词列表
            generated_image_urls: 成功生成的图片公开URL（按提示词顺序）
            created_at: 创建时间
            category: 请求的类别（单提示词请求时为None）
            custom_prompt: 单提示词请求的提示词

        Returns:
            GeneratedImage: 写入的记录
        """
        generated_count = len(generated_image_urls)
        return await self.create(
            id=record_id,
            user_id=user_id,
            original_image_path=original_image_path,
            category=category,
            custom_prompt=custom_prompt,
            prompts=list(prompts),
            generated_image_urls=list(generated_image_urls),
            status=GenerationStatus.from_count(generated_count).value,
            generated_count=generated_count,
            created_at=created_at,
        )
