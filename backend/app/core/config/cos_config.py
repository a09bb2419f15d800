"""
腾讯云COS配置
从全局配置中提取COS连接参数
"""

from dataclasses import dataclass
from typing import Optional

from app.core.config.config import settings


@dataclass(frozen=True)
class COSConfig:
    """COS连接配置"""
    secret_id: str
    secret_key: str
    region: str
    bucket: str
    scheme: str = "https"
    timeout: int = 30
    max_retries: int = 3
    endpoint: Optional[str] = None


def get_cos_config() -> COSConfig:
    """根据全局配置构建COS配置"""
    return COSConfig(
        secret_id=settings.cos_secret_id,
        secret_key=settings.cos_secret_key,
        region=settings.cos_region,
        bucket=settings.cos_bucket,
        scheme=settings.cos_scheme,
        timeout=settings.cos_timeout,
        max_retries=settings.cos_max_retries,
    )


def validate_cos_config(config: Optional[COSConfig]) -> bool:
    """检查COS配置是否完整"""
    if config is None:
        return False
    return bool(config.secret_id and config.secret_key and config.bucket and config.region)
