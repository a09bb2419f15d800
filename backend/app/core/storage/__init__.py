"""
存储服务模块
提供统一的存储服务访问接口，支持多种存储适配器
"""

from typing import Optional

from app.core.config import settings
from app.core.storage.base_storage import BaseStorage
from app.core.storage.adapters import GcsAdapter, TencentCosAdapter
from app.core.storage.exceptions import *
from app.core.storage.factory import (
    create_adapter,
    list_available_adapters,
    register_adapter,
)
from app.core.storage.models import *

# 注册内置适配器
register_adapter(GcsAdapter.ADAPTER_NAME, GcsAdapter)
register_adapter(TencentCosAdapter.ADAPTER_NAME, TencentCosAdapter)


def get_storage_service(adapter_name: Optional[str] = None) -> BaseStorage:
    """
    获取存储服务实例

    Args:
        adapter_name: 适配器名称（'gcs' 或 'tencent_cos'），不指定则使用配置项storage_adapter

    Returns:
        BaseStorage: 存储服务实例

    Raises:
        ConfigurationError: 适配器不存在或配置不完整时抛出

    Example:
        >>> storage = get_storage_service()
        >>> storage = get_storage_service('tencent_cos')
    """
    return create_adapter(adapter_name or settings.storage_adapter)


__all__ = [
    # 工厂函数
    'get_storage_service',
    'create_adapter',
    'list_available_adapters',
    'register_adapter',
    # 抽象接口
    'BaseStorage',
    # 适配器类
    'GcsAdapter',
    'TencentCosAdapter',
]
