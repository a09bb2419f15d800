"""
照片风格化生成相关的Pydantic模型
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class GenerateImageResponse(BaseModel):
    """生成结果响应，字段名与客户端约定保持驼峰"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    generated_id: str = Field(..., alias="generatedId", description="生成记录ID")
    generated_image_urls: List[str] = Field(
        default_factory=list,
        alias="generatedImageUrls",
        description="成功生成的图片公开URL，按提示词顺序"
    )
    created_at: str = Field(..., alias="createdAt", description="记录创建时间（ISO 8601）")


class CategoryListResponse(BaseModel):
    """可用风格类别列表"""
    categories: List[str] = Field(default_factory=list, description="类别名称")
    default_category: str = Field(..., description="未知类别时使用的默认类别")
