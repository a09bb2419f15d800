"""
照片风格化生成处理器
负责请求校验、超时控制、日志记录和异常归类
"""

import asyncio
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.prompts import CategoryPromptCatalog, get_prompt_catalog
from app.services.generation.exceptions import GenerationError, InternalError
from app.services.generation.photo_generation_service import PhotoGenerationService
from app.services.generation.validator import validate_generation_request

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Failed to generate image. Please try again later."


class PhotoGenerationHandler:
    """照片风格化生成处理器"""

    def __init__(self, service: PhotoGenerationService, timeout_seconds: Optional[float] = None):
        self.service = service
        self.timeout_seconds = timeout_seconds or settings.generation_timeout_seconds

    async def handle_generate_images(
        self,
        caller_id: Optional[str],
        payload: Any
    ) -> Dict[str, Any]:
        """
        处理生成请求

        已分类的错误原样抛出；超时和其它异常统一转换为InternalError，
        底层原因只写日志。超时发生时汇总记录尚未写入。

        Returns:
            Dict[str, Any]: {success, generatedId, generatedImageUrls, createdAt}
        """
        try:
            request = validate_generation_request(caller_id, payload)
            outcome = await asyncio.wait_for(
                self.service.generate(request),
                timeout=self.timeout_seconds
            )

        except GenerationError as e:
            logger.warning(
                log_messages.GENERATION_FAILED,
                error_code=e.code,
                error_message=e.message,
                caller_id=caller_id
            )
            raise

        except asyncio.TimeoutError as e:
            logger.error(
                log_messages.GENERATION_TIMEOUT,
                exception=e,
                timeout_seconds=self.timeout_seconds,
                caller_id=caller_id
            )
            raise InternalError(INTERNAL_ERROR_MESSAGE) from e

        except Exception as e:
            logger.error(
                log_messages.GENERATION_FAILED,
                exception=e,
                caller_id=caller_id
            )
            raise InternalError(INTERNAL_ERROR_MESSAGE) from e

        return outcome.to_response()


def list_categories(catalog: Optional[CategoryPromptCatalog] = None) -> Dict[str, Any]:
    """列出可用的风格类别"""
    catalog = catalog or get_prompt_catalog()
    return {
        "categories": catalog.list_categories(),
        "default_category": catalog.default_category,
    }
