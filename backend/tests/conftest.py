"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

环境变量必须在导入app之前设置，Settings在首次导入时实例化
"""

import os

os.environ.setdefault("TESTING", "true")
os.environ.setdefault("APP_DEBUG", "true")
os.environ.setdefault("LOG_LEVEL", "ERROR")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_AUTO_CREATE", "false")
os.environ.setdefault("SECRET_KEY", "unit-test-secret-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("STORAGE_ADAPTER", "gcs")
os.environ.setdefault("GCS_BUCKET", "test-bucket")
os.environ.setdefault("COS_SECRET_ID", "test-secret-id")
os.environ.setdefault("COS_SECRET_KEY", "test-secret-key")
os.environ.setdefault("COS_REGION", "test-region")
os.environ.setdefault("COS_BUCKET", "test-bucket-1250000000")

import pytest  # noqa: E402

from app.prompts import get_prompt_catalog  # noqa: E402
from tests.utils.mock_utils import (  # noqa: E402
    SOURCE_IMAGE_PATH,
    FakeStorage,
    InMemoryGeneratedImageRepository,
)


@pytest.fixture
def prompt_catalog():
    """类别提示词目录"""
    return get_prompt_catalog()


@pytest.fixture
def fake_storage():
    """预置了原图的内存存储"""
    storage = FakeStorage()
    storage.put(SOURCE_IMAGE_PATH)
    return storage


@pytest.fixture
def memory_repository():
    """内存版生成记录仓库"""
    return InMemoryGeneratedImageRepository()


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "logging: 日志相关测试")
    config.addinivalue_line("markers", "validation: 请求校验测试")
    config.addinivalue_line("markers", "prompts: 提示词相关测试")
    config.addinivalue_line("markers", "extraction: 响应解析测试")
    config.addinivalue_line("markers", "generation: 图片生成流程测试")
    config.addinivalue_line("markers", "storage: 存储适配器测试")
    config.addinivalue_line("markers", "repository: 数据访问测试")
    config.addinivalue_line("markers", "security: 身份认证测试")
    config.addinivalue_line("markers", "api: API端点测试")
