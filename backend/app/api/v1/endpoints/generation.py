"""
照片风格化生成API端点
上传到存储中的原图 + 风格类别 → 多张风格化图片
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.image_generation import BaseImageProvider, ImageProviderFactory
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.core.security import get_current_user_id
from app.core.storage import BaseStorage, get_storage_service
from app.core.storage.exceptions import StorageError
from app.db.database import get_db
from app.repositories.generated_image import GeneratedImageRepository
from app.schemas.common import ErrorResponse
from app.schemas.generation import CategoryListResponse, GenerateImageResponse
from app.services.generation.exceptions import InternalError, UnauthenticatedError
from app.services.generation.photo_generation_handler import (
    INTERNAL_ERROR_MESSAGE,
    PhotoGenerationHandler,
    list_categories,
)
from app.services.generation.photo_generation_service import PhotoGenerationService

logger = get_logger(__name__)

router = APIRouter(tags=["AI生成"])


def require_caller_id(caller_id: Optional[str] = Depends(get_current_user_id)) -> str:
    """
    调用方身份依赖

    必须排在存储、提供商和数据库依赖之前，未认证请求不会触发这些依赖的构建。

    Raises:
        UnauthenticatedError: 未认证
    """
    if not caller_id:
        logger.warning(log_messages.VALIDATION_FAILED, reason="caller")
        raise UnauthenticatedError("User must be authenticated to generate images.")
    return caller_id


def get_storage() -> BaseStorage:
    """存储适配器依赖"""
    try:
        return get_storage_service()
    except StorageError as e:
        logger.error("存储适配器初始化失败", exception=e)
        raise InternalError(INTERNAL_ERROR_MESSAGE) from e


def get_image_provider() -> BaseImageProvider:
    """图片生成提供商依赖"""
    try:
        return ImageProviderFactory.create_provider()
    except ValueError as e:
        logger.error("图片生成提供商初始化失败", exception=e)
        raise InternalError(INTERNAL_ERROR_MESSAGE) from e


def get_generation_handler(
    caller_id: str = Depends(require_caller_id),
    db: AsyncSession = Depends(get_db),
    storage: BaseStorage = Depends(get_storage),
    provider: BaseImageProvider = Depends(get_image_provider),
) -> PhotoGenerationHandler:
    """组装生成处理器，调用方身份先于其它依赖解析"""
    service = PhotoGenerationService(
        storage=storage,
        repository=GeneratedImageRepository(db),
        provider=provider,
    )
    return PhotoGenerationHandler(service)


@router.post(
    "/images",
    response_model=GenerateImageResponse,
    response_model_by_alias=True,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="生成风格化照片",
    description="按风格类别（或单条自定义提示词）基于已上传的原图生成风格化照片"
)
async def generate_images(
    payload: Any = Body(default=None),
    caller_id: str = Depends(require_caller_id),
    handler: PhotoGenerationHandler = Depends(get_generation_handler),
) -> GenerateImageResponse:
    """
    生成风格化照片

    请求体不使用Pydantic模型校验，字段错误统一由业务层返回invalid-argument。

    Args:
        payload: {"imagePath": "...", "category": "beach"} 或 {"imagePath": "...", "prompt": "..."}
        caller_id: 已认证的调用方ID
        handler: 生成处理器

    Returns:
        GenerateImageResponse: {success, generatedId, generatedImageUrls, createdAt}
    """
    data = await handler.handle_generate_images(caller_id, payload)
    return GenerateImageResponse(**data)


@router.get(
    "/categories",
    response_model=CategoryListResponse,
    summary="列出风格类别",
    description="返回可用的风格类别和默认类别"
)
async def get_categories() -> CategoryListResponse:
    """列出风格类别"""
    return CategoryListResponse(**list_categories())
