"""
图片生成提供商基类
定义所有图片生成提供商的统一接口
"""

from abc import ABC, abstractmethod
from typing import Any, List

from app.core.image_generation.config import ImageModelConfig
from app.core.log_utils import get_logger

logger = get_logger(__name__)


class BaseImageProvider(ABC):
    """
    图片生成提供商基类

    提供商只负责把"原图 + 提示词"发送给上游模型并返回原始响应。
    上游响应结构随API版本变化，由extractors模块负责解析。
    """

    # 支持的模型名称（小写子串匹配）
    SUPPORTED_MODELS: List[str] = []

    def __init__(self, model_config: ImageModelConfig):
        self.model_config = model_config
        self.model = model_config.name

    @abstractmethod
    async def generate_content(self, image_data: bytes, mime_type: str, prompt: str) -> Any:
        """
        以单个多模态请求调用上游模型

        Args:
            image_data: 原图字节
            mime_type: 原图MIME类型
            prompt: 生成指令

        Returns:
            Any: 上游原始响应（不可信，结构可变）
        """

    @classmethod
    def supports_model(cls, model_name: str) -> bool:
        """检查是否支持指定模型"""
        return any(
            supported_name.lower() in model_name.lower()
            for supported_name in cls.SUPPORTED_MODELS
        )

    def get_supported_models(self) -> List[str]:
        """获取支持的模型列表"""
        return list(self.SUPPORTED_MODELS)

    async def close(self) -> None:
        """释放客户端资源，默认无操作"""
