"""
图片生成配置管理
统一管理图片生成提供商所需的模型配置
"""

from dataclasses import dataclass
from typing import Optional

from app.core.config import settings


@dataclass(frozen=True)
class ImageModelConfig:
    """
    图片生成模型配置

    Attributes:
        provider: 提供商名称，对应ImageProviderFactory中的注册名
        name: 模型名称
        api_key: API密钥
        base_url: API基础URL（可选，用于代理）
    """
    provider: str
    name: str
    api_key: str
    base_url: Optional[str] = None

    def __repr__(self) -> str:
        # 避免密钥出现在日志中
        return (
            f"ImageModelConfig(provider={self.provider!r}, name={self.name!r}, "
            f"base_url={self.base_url!r})"
        )


def get_default_model_config() -> ImageModelConfig:
    """根据全局配置构建默认的图片生成模型配置"""
    return ImageModelConfig(
        provider=settings.image_provider,
        name=settings.gemini_image_model,
        api_key=settings.GEMINI_API_KEY,
        base_url=settings.gemini_base_url,
    )
