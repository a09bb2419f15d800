"""
Repository模块
包含所有数据访问层的Repository类
"""

from .base import BaseRepository
from .generated_image import GeneratedImageRepository

__all__ = [
    'BaseRepository',
    'GeneratedImageRepository'
]
