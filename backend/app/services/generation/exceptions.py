"""
图片生成业务异常
调用方可见的错误分类：unauthenticated / invalid-argument / not-found / internal
单张图片生成失败不属于这里，只体现在成功数量和status上
"""

from typing import Any, Dict, Optional

from fastapi import status


class GenerationError(Exception):
    """
    图片生成业务异常基类

    Attributes:
        message: 返回给调用方的错误消息
        code: 错误码
        status_code: 对应的HTTP状态码
        details: 错误详情（只写日志，不返回给调用方）
    """

    code: str = "internal"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class UnauthenticatedError(GenerationError):
    """调用方未认证"""
    code = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidArgumentError(GenerationError):
    """请求参数缺失或格式错误"""
    code = "invalid-argument"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(GenerationError):
    """引用的原图不存在"""
    code = "not-found"
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(GenerationError):
    """其它未分类错误，消息固定，不泄露底层原因"""
    code = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


__all__ = [
    "GenerationError",
    "UnauthenticatedError",
    "InvalidArgumentError",
    "NotFoundError",
    "InternalError",
]
