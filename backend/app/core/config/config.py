"""
应用配置管理模块
统一管理所有配置信息，包括环境变量和文件配置
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator, ConfigDict

from app.utils.config_utils import get_workspace_path, get_config_path


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "Photo AI"
    app_version: str = "1.0.0"
    app_debug: bool = True
    app_env: str = "development"

    # ==================== API配置 ====================
    api_v1_str: str = "/api/v1"
    project_name: str = "Photo AI API"

    # ==================== 数据库配置 ====================
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "photo_ai_dev"
    POSTGRES_PASSWORD: str = "dev_password"
    POSTGRES_DB: str = "photo_ai_dev"
    # 显式指定时覆盖POSTGRES_*拼出的连接串（单元测试使用sqlite+aiosqlite）
    DATABASE_URL: Optional[str] = None
    db_echo: bool = False
    db_auto_create: bool = True

    # ==================== 安全配置 ====================
    SECRET_KEY: str = "development-secret-key-change-in-production"
    ALGORITHM: str = "HS256"

    # ==================== Gemini配置 ====================
    GEMINI_API_KEY: str = ""
    gemini_base_url: Optional[str] = None
    gemini_image_model: str = "gemini-2.5-flash-image"
    image_provider: str = "nano_banana"

    # ==================== 对象存储配置 ====================
    # 可选: gcs | tencent_cos
    storage_adapter: str = "gcs"

    gcs_bucket: str = ""
    gcs_project: Optional[str] = None
    gcs_public_base_url: str = "https://storage.googleapis.com"

    cos_secret_id: str = ""
    cos_secret_key: str = ""
    cos_region: str = "ap-beijing"
    cos_bucket: str = ""
    cos_scheme: str = "https"
    cos_timeout: int = 30
    cos_max_retries: int = 3
    cos_retry_delay_base: int = 1

    # ==================== 图片生成配置 ====================
    generation_default_category: str = "beach"
    generation_timeout_seconds: float = 120.0
    generation_output_mime_type: str = "image/jpeg"
    generation_default_source_mime_type: str = "image/jpeg"
    generation_storage_prefix: str = "users"

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_file: str = "backend.log"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_to_file: bool = True

    # ==================== 应用服务配置 ====================
    app_port: int = 8080
    app_host: str = "0.0.0.0"

    # ==================== 验证器 ====================
    @field_validator("generation_timeout_seconds")
    @classmethod
    def check_generation_timeout(cls, value: float) -> float:
        """生成超时必须为正数"""
        if value <= 0:
            raise ValueError("generation_timeout_seconds必须大于0")
        return value

    # ==================== 计算属性 ====================
    @property
    def async_database_url(self) -> str:
        """构建异步数据库连接URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def workspace_dir(self) -> str:
        """获取workspace目录路径"""
        return str(get_workspace_path())

    model_config = ConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        validate_default=True
    )


def get_settings() -> Settings:
    """获取应用配置实例"""
    # 环境变量文件加载由外部环境控制（Docker Compose、部署脚本等）
    return Settings()


# 全局配置实例
settings = get_settings()
