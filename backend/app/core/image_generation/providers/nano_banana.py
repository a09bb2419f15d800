"""
Nano Banana (Gemini Flash Image) 图片生成提供商
基于 Google GenAI SDK 实现，以"原图 + 文本指令"的方式生成新图片
"""

import asyncio
from functools import partial
from typing import Any

from google import genai
from google.genai import types

from app.core.image_generation.base import BaseImageProvider
from app.core.image_generation.config import ImageModelConfig
from app.core.log_utils import get_logger

logger = get_logger(__name__)


class NanoBananaProvider(BaseImageProvider):
    """Nano Banana 图片生成提供商"""

    SUPPORTED_MODELS = [
        "gemini-2.5-flash-image",
        "gemini-3-pro-image-preview",
        "nano-banana",
        "nano banana",
    ]

    def __init__(self, model_config: ImageModelConfig, client: Any = None):
        """
        初始化Nano Banana提供商

        Args:
            model_config: 模型配置
                - api_key: Google API密钥
                - base_url: API基础URL（可选，用于代理）
                - name: 模型名称
            client: 预先构建的genai.Client（测试时注入）
        """
        super().__init__(model_config)

        if client is None:
            http_options = None
            if model_config.base_url:
                http_options = types.HttpOptions(base_url=model_config.base_url)
            client = genai.Client(api_key=model_config.api_key, http_options=http_options)

        self.client = client

        logger.info(
            "NanoBananaProvider初始化成功",
            operation="provider_init_success",
            model=self.model,
            has_api_base=bool(model_config.base_url)
        )

    def _build_contents(self, image_data: bytes, mime_type: str, prompt: str) -> list:
        """原图和文本放在同一个content中，图片在前"""
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=image_data, mime_type=mime_type),
                    types.Part.from_text(text=prompt),
                ],
            )
        ]

    async def generate_content(self, image_data: bytes, mime_type: str, prompt: str) -> Any:
        """
        调用Gemini API

        同步SDK调用放到线程池执行，避免阻塞事件循环。异常直接向上抛出，
        由调用方按单次生成失败处理。
        """
        logger.info(
            "调用Gemini API生成图片",
            operation="api_call_start",
            model=self.model,
            prompt_length=len(prompt),
            image_size=len(image_data),
            mime_type=mime_type
        )

        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(
            None,
            partial(
                self.client.models.generate_content,
                model=self.model,
                contents=self._build_contents(image_data, mime_type, prompt),
                config=types.GenerateContentConfig(
                    response_modalities=["TEXT", "IMAGE"],
                ),
            )
        )

        logger.debug(
            "Gemini API响应完成",
            operation="api_response_received",
            candidates_count=len(getattr(response, "candidates", None) or [])
        )
        return response
