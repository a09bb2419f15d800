"""
测试工具模块
"""

from .mock_utils import (
    FakeStorage,
    InMemoryGeneratedImageRepository,
    ResponseBuilder,
    ScriptedImageProvider,
)

__all__ = [
    'FakeStorage',
    'InMemoryGeneratedImageRepository',
    'ResponseBuilder',
    'ScriptedImageProvider',
]
