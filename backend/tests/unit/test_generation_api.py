"""
照片风格化生成API端点单元测试
通过dependency_overrides注入内存依赖
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.api.v1.endpoints.generation import get_generation_handler, get_image_provider, get_storage
from app.core.security import create_access_token
from app.services.generation.exceptions import InternalError
from app.services.generation.photo_generation_handler import PhotoGenerationHandler
from app.services.generation.photo_generation_service import PhotoGenerationService
from main import app
from tests.utils.mock_utils import (
    SOURCE_IMAGE_PATH,
    TEST_USER_ID,
    InMemoryGeneratedImageRepository,
    ResponseBuilder,
    ScriptedImageProvider,
)

GENERATE_URL = "/api/v1/generate/images"


@pytest.mark.unit
@pytest.mark.api
class TestGenerationApi:
    """生成API端点测试类"""

    @pytest.fixture
    def repository(self):
        return InMemoryGeneratedImageRepository(ids=["abc123"])

    @pytest.fixture
    def client(self, fake_storage, repository, prompt_catalog):
        def override_handler():
            service = PhotoGenerationService(
                storage=fake_storage,
                repository=repository,
                provider=ScriptedImageProvider([
                    ResponseBuilder.inline_data(),
                    RuntimeError("upstream 500"),
                    ResponseBuilder.inline_data(),
                ]),
                prompt_catalog=prompt_catalog,
            )
            return PhotoGenerationHandler(service)

        app.dependency_overrides[get_generation_handler] = override_handler
        yield TestClient(app)
        app.dependency_overrides.clear()

    @pytest.fixture
    def auth_headers(self):
        return {"Authorization": f"Bearer {create_access_token(TEST_USER_ID)}"}

    def test_generate_images(self, client, auth_headers, repository):
        """成功请求返回驼峰字段"""
        response = client.post(
            GENERATE_URL,
            json={"imagePath": SOURCE_IMAGE_PATH, "category": "beach"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["generatedId"] == "abc123"
        assert [url.rsplit("/", 1)[1] for url in body["generatedImageUrls"]] == ["abc123_0.jpg", "abc123_2.jpg"]
        assert body["createdAt"].endswith("Z")
        assert repository.records[0]["status"] == "completed"

    def test_unauthenticated(self, client, repository):
        """没有令牌"""
        response = client.post(GENERATE_URL, json={"imagePath": SOURCE_IMAGE_PATH, "category": "beach"})

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "User must be authenticated to generate images.",
            "error_code": "unauthenticated",
        }
        assert repository.records == []

    def test_invalid_token(self, client):
        """令牌无效按未认证处理"""
        response = client.post(
            GENERATE_URL,
            json={"imagePath": SOURCE_IMAGE_PATH, "category": "beach"},
            headers={"Authorization": "Bearer garbage"},
        )

        assert response.status_code == 401

    def test_invalid_argument(self, client, auth_headers):
        """imagePath不是字符串时返回400而不是422"""
        response = client.post(GENERATE_URL, json={"imagePath": 12, "category": "beach"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid-argument"

    def test_missing_body(self, client, auth_headers):
        """没有请求体"""
        response = client.post(GENERATE_URL, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "imagePath is required and must be a string."

    def test_not_found(self, client, auth_headers, repository):
        """原图不存在"""
        response = client.post(
            GENERATE_URL,
            json={"imagePath": "users/user-123/uploads/missing.png", "category": "beach"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "not-found"
        assert repository.records == []

    def test_list_categories(self, client):
        """列出类别"""
        response = client.get("/api/v1/generate/categories")

        assert response.status_code == 200
        assert response.json()["default_category"] == "beach"
        assert "cyberpunk" in response.json()["categories"]

    def test_health(self, client):
        """健康检查"""
        assert client.get("/health").json() == {"status": "healthy"}


@pytest.mark.unit
@pytest.mark.api
class TestGenerationDependencies:
    """依赖构建失败时返回internal"""

    def test_storage_configuration_error(self):
        """存储未配置"""
        with patch('app.core.storage.adapters.gcs.settings') as mock_settings:
            mock_settings.gcs_bucket = ""
            with pytest.raises(InternalError):
                get_storage()

    def test_unknown_image_provider(self):
        """提供商未注册"""
        with patch('app.api.v1.endpoints.generation.ImageProviderFactory.create_provider',
                   side_effect=ValueError("不支持的提供商类型: x")):
            with pytest.raises(InternalError):
                get_image_provider()

    def test_internal_error_response(self):
        """依赖抛出InternalError时返回统一错误结构"""
        def failing_handler():
            raise InternalError("Failed to generate image. Please try again later.")

        app.dependency_overrides[get_generation_handler] = failing_handler
        try:
            response = TestClient(app).post(
                GENERATE_URL,
                json={},
                headers={"Authorization": f"Bearer {create_access_token(TEST_USER_ID)}"},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error_code"] == "internal"

    def test_unauthenticated_before_storage_is_built(self):
        """未认证请求在构建存储之前返回401"""
        with patch('app.core.storage.adapters.gcs.storage.Client',
                   side_effect=OSError("no default credentials")) as mock_client:
            response = TestClient(app).post(GENERATE_URL, json={"imagePath": SOURCE_IMAGE_PATH, "category": "beach"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "unauthenticated"
        mock_client.assert_not_called()

    def test_authenticated_storage_failure(self):
        """已认证但存储构建失败时返回internal"""
        with patch('app.core.storage.adapters.gcs.storage.Client',
                   side_effect=OSError("no default credentials")) as mock_client:
            response = TestClient(app).post(
                GENERATE_URL,
                json={"imagePath": SOURCE_IMAGE_PATH, "category": "beach"},
                headers={"Authorization": f"Bearer {create_access_token(TEST_USER_ID)}"},
            )

        assert response.status_code == 500
        assert response.json()["error_code"] == "internal"
        mock_client.assert_called_once()
