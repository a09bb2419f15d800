"""
图片生成提供商工厂
负责创建和管理图片生成提供商实例
"""

from typing import Dict, Type, Optional

from app.core.image_generation.base import BaseImageProvider
from app.core.image_generation.config import ImageModelConfig, get_default_model_config
from app.core.log_utils import get_logger

logger = get_logger(__name__)


class ImageProviderFactory:
    """图片生成提供商工厂"""

    _providers: Dict[str, Type[BaseImageProvider]] = {}

    @classmethod
    def register_provider(cls, provider_name: str, provider_class: Type[BaseImageProvider]):
        """
        注册提供商

        Args:
            provider_name: 提供商名称
            provider_class: 提供商类
        """
        if provider_name in cls._providers:
            logger.warning("提供商已存在，将被覆盖", provider_name=provider_name)

        cls._providers[provider_name] = provider_class
        logger.debug("注册图片生成提供商", provider_name=provider_name)

    @classmethod
    def create_provider(cls, model_config: Optional[ImageModelConfig] = None) -> BaseImageProvider:
        """
        创建提供商实例

        Args:
            model_config: 模型配置，不指定则使用全局配置

        Returns:
            BaseImageProvider: 提供商实例

        Raises:
            ValueError: 如果提供商类型不支持
        """
        model_config = model_config or get_default_model_config()

        if model_config.provider not in cls._providers:
            raise ValueError(f"不支持的提供商类型: {model_config.provider}")

        provider_class = cls._providers[model_config.provider]
        return provider_class(model_config)

    @classmethod
    def get_provider_for_model(cls, model_name: str) -> Optional[Type[BaseImageProvider]]:
        """根据模型名称获取提供商类，找不到时返回None"""
        for provider_class in cls._providers.values():
            if provider_class.supports_model(model_name):
                return provider_class
        return None

    @classmethod
    def get_available_providers(cls) -> Dict[str, Type[BaseImageProvider]]:
        """获取所有可用的提供商"""
        return cls._providers.copy()

    @classmethod
    def is_provider_supported(cls, provider_name: str) -> bool:
        """检查是否支持指定的提供商"""
        return provider_name in cls._providers
