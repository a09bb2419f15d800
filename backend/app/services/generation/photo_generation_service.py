"""
照片风格化生成服务
按类别提示词逐条调用图片生成模型，单条失败不影响其它提示词，
结束后写入一条汇总记录
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.core.config import settings
from app.core.image_generation.base import BaseImageProvider
from app.core.image_generation.extractors import (
    DEFAULT_EXTRACTORS,
    ImageExtractionError,
    PartExtractor,
    extract_image,
)
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.core.storage.base_storage import BaseStorage
from app.models.generated_image import GenerationStatus
from app.prompts import CategoryPromptCatalog, get_prompt_catalog
from app.repositories.generated_image import GeneratedImageRepository
from app.services.generation.exceptions import NotFoundError
from app.services.generation.validator import GenerationRequest
from app.utils.datetime_utils import to_iso_string, utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationAttempt:
    """单条提示词的生成结果"""
    index: int
    prompt: str
    storage_path: Optional[str] = None
    public_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.public_url is not None

    @classmethod
    def success(cls, index: int, prompt: str, storage_path: str, public_url: str) -> "GenerationAttempt":
        return cls(index=index, prompt=prompt, storage_path=storage_path, public_url=public_url)

    @classmethod
    def failure(cls, index: int, prompt: str, error: str) -> "GenerationAttempt":
        return cls(index=index, prompt=prompt, error=error)


@dataclass(frozen=True)
class GenerationOutcome:
    """一次生成请求的汇总结果"""
    generated_id: str
    created_at: datetime
    attempts: List[GenerationAttempt] = field(default_factory=list)

    @property
    def generated_image_urls(self) -> List[str]:
        """成功的图片URL，按提示词顺序，失败的不占位"""
        return [attempt.public_url for attempt in self.attempts if attempt.succeeded]

    @property
    def generated_count(self) -> int:
        return len(self.generated_image_urls)

    @property
    def status(self) -> GenerationStatus:
        return GenerationStatus.from_count(self.generated_count)

    def to_response(self) -> Dict[str, Any]:
        """返回给调用方的结果"""
        return {
            "success": True,
            "generatedId": self.generated_id,
            "generatedImageUrls": self.generated_image_urls,
            "createdAt": to_iso_string(self.created_at),
        }


class PhotoGenerationService:
    """照片风格化生成服务"""

    def __init__(
        self,
        storage: BaseStorage,
        repository: GeneratedImageRepository,
        provider: BaseImageProvider,
        prompt_catalog: Optional[CategoryPromptCatalog] = None,
        extractors: Sequence[PartExtractor] = DEFAULT_EXTRACTORS,
    ):
        self.storage = storage
        self.repository = repository
        self.provider = provider
        self.prompt_catalog = prompt_catalog or get_prompt_catalog()
        self.extractors = extractors

    def resolve_prompts(self, request: GenerationRequest) -> Tuple[str, ...]:
        """类别请求解析为类别提示词，自定义提示词请求只生成一张"""
        if request.category is not None:
            return self.prompt_catalog.resolve(request.category)
        return (request.prompt,)

    @staticmethod
    def build_storage_path(caller_id: str, generated_id: str, index: int) -> str:
        """生成图片的存储路径: users/{uid}/generated/{id}_{index}.jpg"""
        return f"{settings.generation_storage_prefix}/{caller_id}/generated/{generated_id}_{index}.jpg"

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        """
        执行完整的生成流程

        Raises:
            NotFoundError: 原图不存在（不写任何记录）
        """
        prompts = self.resolve_prompts(request)
        generated_id = self.repository.new_id()

        if not await self.storage.exists(request.image_path):
            logger.warning(
                log_messages.SOURCE_IMAGE_NOT_FOUND,
                image_path=request.image_path,
                caller_id=request.caller_id
            )
            raise NotFoundError("Original image not found.")

        source = await self.storage.download(request.image_path)
        mime_type = source.mime_type or settings.generation_default_source_mime_type

        logger.info(
            log_messages.GENERATION_START,
            category=request.category or "custom",
            prompt_count=len(prompts),
            generated_id=generated_id,
            caller_id=request.caller_id
        )

        attempts = await self.run_generation_loop(
            request=request,
            generated_id=generated_id,
            image_data=source.data,
            mime_type=mime_type,
            prompts=prompts,
        )

        outcome = GenerationOutcome(
            generated_id=generated_id,
            created_at=utc_now(),
            attempts=attempts,
        )

        await self.repository.create_record(
            record_id=generated_id,
            user_id=request.caller_id,
            original_image_path=request.image_path,
            prompts=prompts,
            generated_image_urls=outcome.generated_image_urls,
            created_at=outcome.created_at,
            category=request.category,
            custom_prompt=request.prompt if request.category is None else None,
        )

        logger.info(
            log_messages.GENERATION_SUCCESS,
            generated_count=outcome.generated_count,
            prompt_count=len(prompts),
            generated_id=generated_id,
            status=outcome.status.value
        )
        return outcome

    async def run_generation_loop(
        self,
        request: GenerationRequest,
        generated_id: str,
        image_data: bytes,
        mime_type: str,
        prompts: Sequence[str],
    ) -> List[GenerationAttempt]:
        """按顺序逐条生成，每条提示词都会被尝试"""
        attempts = []
        for index, prompt in enumerate(prompts):
            attempt = await self._run_attempt(
                request=request,
                generated_id=generated_id,
                index=index,
                prompt=prompt,
                image_data=image_data,
                mime_type=mime_type,
                prompt_count=len(prompts),
            )
            attempts.append(attempt)
        return attempts

    async def _run_attempt(
        self,
        request: GenerationRequest,
        generated_id: str,
        index: int,
        prompt: str,
        image_data: bytes,
        mime_type: str,
        prompt_count: int,
    ) -> GenerationAttempt:
        """
        生成、上传并公开一张图片

        任何异常都记为本条失败，不向上抛出。
        """
        attempt_number = index + 1
        try:
            response = await self.provider.generate_content(
                image_data=image_data,
                mime_type=mime_type,
                prompt=prompt,
            )
            image = extract_image(response, self.extractors)

            storage_path = self.build_storage_path(request.caller_id, generated_id, index)
            await self.storage.upload(
                image.data,
                storage_path,
                settings.generation_output_mime_type,
                metadata={
                    "category": request.category or "custom",
                    "promptIndex": str(index),
                    "generatedAt": to_iso_string(utc_now()),
                },
            )
            await self.storage.make_public(storage_path)
            public_url = self.storage.public_url(storage_path)

        except ImageExtractionError as e:
            logger.warning(
                log_messages.ATTEMPT_NO_IMAGE,
                attempt=attempt_number,
                reason=e.reason,
                generated_id=generated_id
            )
            return GenerationAttempt.failure(index, prompt, e.message)

        except Exception as e:
            logger.error(
                log_messages.ATTEMPT_FAILED,
                exception=e,
                attempt=attempt_number,
                generated_id=generated_id
            )
            return GenerationAttempt.failure(index, prompt, str(e) or type(e).__name__)

        logger.info(
            log_messages.ATTEMPT_SUCCESS,
            attempt=attempt_number,
            prompt_count=prompt_count,
            source_field=image.source_field,
            storage_path=storage_path
        )
        return GenerationAttempt.success(index, prompt, storage_path, public_url)
