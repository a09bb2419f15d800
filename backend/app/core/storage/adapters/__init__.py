"""
存储适配器
每个适配器实现BaseStorage接口，对接一种对象存储后端
"""

from app.core.storage.adapters.gcs import GcsAdapter
from app.core.storage.adapters.tencent_cos import TencentCosAdapter

__all__ = ['GcsAdapter', 'TencentCosAdapter']
