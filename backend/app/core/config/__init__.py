"""
配置模块
包含应用配置以及各存储后端的连接配置
"""

from app.core.config.config import Settings, settings, get_settings

__all__ = ["Settings", "settings", "get_settings"]
