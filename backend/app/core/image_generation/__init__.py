"""
图片生成模块
"""

from .base import BaseImageProvider
from .config import ImageModelConfig, get_default_model_config
from .extractors import ExtractedImage, extract_image, DEFAULT_EXTRACTORS
from .factory import ImageProviderFactory
from .providers.nano_banana import NanoBananaProvider

# 注册所有提供商
ImageProviderFactory.register_provider("nano_banana", NanoBananaProvider)

__all__ = [
    "BaseImageProvider",
    "ImageModelConfig",
    "get_default_model_config",
    "ExtractedImage",
    "extract_image",
    "DEFAULT_EXTRACTORS",
    "ImageProviderFactory",
    "NanoBananaProvider",
]
