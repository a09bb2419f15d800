"""
图片生成提供商单元测试
"""

from unittest.mock import MagicMock

import pytest
from google.genai import types

from app.core.image_generation import (
    ImageModelConfig,
    ImageProviderFactory,
    NanoBananaProvider,
    get_default_model_config,
)


@pytest.fixture
def model_config():
    return ImageModelConfig(
        provider="nano_banana",
        name="gemini-2.5-flash-image",
        api_key="test-gemini-key",
    )


@pytest.mark.unit
@pytest.mark.generation
class TestNanoBananaProvider:
    """NanoBananaProvider 单元测试类"""

    @pytest.mark.asyncio
    async def test_generate_content_sends_image_then_prompt(self, model_config):
        """原图和提示词作为同一个多模态请求发送"""
        mock_client = MagicMock()
        mock_client.models.generate_content.return_value = {"candidates": []}
        provider = NanoBananaProvider(model_config, client=mock_client)

        response = await provider.generate_content(b"jpeg-bytes", "image/jpeg", "make it sunny")

        assert response == {"candidates": []}
        kwargs = mock_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image"
        assert kwargs["config"].response_modalities == ["TEXT", "IMAGE"]

        contents = kwargs["contents"]
        assert len(contents) == 1
        image_part, text_part = contents[0].parts
        assert image_part.inline_data.data == b"jpeg-bytes"
        assert image_part.inline_data.mime_type == "image/jpeg"
        assert text_part.text == "make it sunny"

    @pytest.mark.asyncio
    async def test_generate_content_propagates_errors(self, model_config):
        """上游异常直接抛出"""
        mock_client = MagicMock()
        mock_client.models.generate_content.side_effect = RuntimeError("quota exceeded")
        provider = NanoBananaProvider(model_config, client=mock_client)

        with pytest.raises(RuntimeError):
            await provider.generate_content(b"x", "image/png", "p")

    def test_supports_model(self):
        """模型名称匹配"""
        assert NanoBananaProvider.supports_model("gemini-2.5-flash-image")
        assert NanoBananaProvider.supports_model("Nano-Banana")
        assert not NanoBananaProvider.supports_model("dall-e-3")

    def test_config_repr_hides_api_key(self, model_config):
        """配置的repr不包含密钥"""
        assert "test-gemini-key" not in repr(model_config)

    def test_build_contents_types(self, model_config):
        """请求内容使用SDK类型"""
        provider = NanoBananaProvider(model_config, client=MagicMock())
        contents = provider._build_contents(b"x", "image/png", "p")

        assert isinstance(contents[0], types.Content)
        assert contents[0].role == "user"


@pytest.mark.unit
@pytest.mark.generation
class TestImageProviderFactory:
    """ImageProviderFactory 测试"""

    def test_nano_banana_registered(self):
        """默认注册nano_banana"""
        assert ImageProviderFactory.is_provider_supported("nano_banana")
        assert ImageProviderFactory.get_provider_for_model("gemini-2.5-flash-image") is NanoBananaProvider

    def test_unknown_provider(self, model_config):
        """不支持的提供商"""
        config = ImageModelConfig(provider="unknown", name="x", api_key="k")

        with pytest.raises(ValueError):
            ImageProviderFactory.create_provider(config)

    def test_default_model_config(self):
        """默认配置来自全局配置"""
        config = get_default_model_config()

        assert config.provider == "nano_banana"
        assert config.name == "gemini-2.5-flash-image"
        assert config.api_key == "test-gemini-key"
