"""
图片生成请求校验
在任何外部调用之前拒绝非法请求，校验失败没有副作用
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.services.generation.exceptions import InvalidArgumentError, UnauthenticatedError

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """
    通过校验的生成请求

    category和prompt二选一：提供category时按类别生成多张，
    只提供prompt时按单条自定义提示词生成一张。
    """
    caller_id: str
    image_path: str
    category: Optional[str] = None
    prompt: Optional[str] = None


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_generation_request(
    caller_id: Optional[str],
    payload: Any
) -> GenerationRequest:
    """
    校验调用方身份和请求字段

    Args:
        caller_id: 已认证的调用方ID，未认证为None
        payload: 请求体，形如 {"imagePath": ..., "category": ...} 或 {"imagePath": ..., "prompt": ...}

    Returns:
        GenerationRequest: 校验通过的请求

    Raises:
        UnauthenticatedError: 未认证
        InvalidArgumentError: imagePath或category/prompt缺失、不是字符串
    """
    if not caller_id:
        raise UnauthenticatedError("User must be authenticated to generate images.")

    if not isinstance(payload, Mapping):
        payload = {}

    image_path = payload.get("imagePath")
    if not _is_non_empty_string(image_path):
        logger.warning(log_messages.VALIDATION_FAILED, reason="imagePath", caller_id=caller_id)
        raise InvalidArgumentError("imagePath is required and must be a string.")

    if "category" in payload and payload["category"] is not None:
        category = payload["category"]
        if not _is_non_empty_string(category):
            logger.warning(log_messages.VALIDATION_FAILED, reason="category", caller_id=caller_id)
            raise InvalidArgumentError("category is required and must be a string.")
        return GenerationRequest(caller_id=caller_id, image_path=image_path, category=category.strip())

    prompt = payload.get("prompt")
    if prompt is None:
        logger.warning(log_messages.VALIDATION_FAILED, reason="category", caller_id=caller_id)
        raise InvalidArgumentError("category is required and must be a string.")
    if not _is_non_empty_string(prompt):
        logger.warning(log_messages.VALIDATION_FAILED, reason="prompt", caller_id=caller_id)
        raise InvalidArgumentError("prompt is required and must be a string.")

    return GenerationRequest(caller_id=caller_id, image_path=image_path, prompt=prompt)
