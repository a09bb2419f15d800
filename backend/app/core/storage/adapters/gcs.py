"""
Google Cloud Storage存储适配器
实现BaseStorage接口，对接Firebase Storage默认使用的GCS存储桶
"""

import asyncio
from functools import partial
from typing import Callable, Dict, Optional, TypeVar
from urllib.parse import quote

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage

from app.core.config import settings
from app.core.log_utils import get_logger
from app.core.storage.base_storage import BaseStorage
from app.core.storage.exceptions import (
    ConfigurationError,
    DownloadError,
    MetadataError,
    PublicAccessError,
    StorageError,
    UploadError,
)
from app.core.storage.models import DownloadResult, MetadataResult, UploadResult

logger = get_logger(__name__)

T = TypeVar('T')


class GcsAdapter(BaseStorage):
    """
    GCS存储适配器

    认证使用Application Default Credentials（Cloud Run / Cloud Functions 中的
    服务账号，或本地的 GOOGLE_APPLICATION_CREDENTIALS）。
    """

    ADAPTER_NAME: str = "gcs"

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        client: Optional[storage.Client] = None
    ) -> None:
        """
        初始化GCS客户端

        Raises:
            ConfigurationError: 未配置存储桶时抛出
        """
        self.bucket_name = bucket_name or settings.gcs_bucket
        if not self.bucket_name:
            raise ConfigurationError("GCS存储桶未配置，请设置GCS_BUCKET")

        self._client = client or storage.Client(project=settings.gcs_project)
        self._bucket = self._client.bucket(self.bucket_name)

    async def _run_in_executor(self, func: Callable[..., T], *args, **kwargs) -> T:
        """在线程池中运行同步SDK调用"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def upload(
        self,
        data: bytes,
        key: str,
        mime_type: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> UploadResult:
        """
        上传文件到GCS

        使用 if_generation_match=0 前置条件，对象已存在时上传失败而不是覆盖。

        Raises:
            UploadError: 上传失败时抛出
        """
        blob = self._bucket.blob(key)
        if metadata:
            blob.metadata = dict(metadata)

        try:
            await self._run_in_executor(
                blob.upload_from_string,
                data,
                content_type=mime_type,
                if_generation_match=0
            )
        except GoogleAPIError as e:
            logger.error("GCS上传失败", exception=e, key=key)
            raise UploadError("上传文件失败: {}".format(str(e)), details={'key': key}) from e

        return UploadResult(
            key=key,
            url=self.public_url(key),
            size=len(data),
            mime_type=mime_type,
            bucket=self.bucket_name,
            etag=blob.etag,
            uploaded_at=blob.time_created
        )

    async def download(self, key: str) -> DownloadResult:
        """
        下载文件，同时读取对象的Content-Type

        Raises:
            DownloadError: 对象不存在或下载失败时抛出
        """
        try:
            blob = await self._run_in_executor(self._bucket.get_blob, key)
            if blob is None:
                raise DownloadError("文件不存在: {}".format(key), details={'key': key})
            data = await self._run_in_executor(blob.download_as_bytes)
        except GoogleAPIError as e:
            logger.error("GCS下载失败", exception=e, key=key)
            raise DownloadError("下载文件失败: {}".format(str(e)), details={'key': key}) from e

        return DownloadResult(
            data=data,
            size=len(data),
            mime_type=blob.content_type or '',
            last_modified=blob.updated,
            etag=blob.etag
        )

    async def exists(self, key: str) -> bool:
        """检查文件是否存在"""
        try:
            return await self._run_in_executor(self._bucket.blob(key).exists)
        except GoogleAPIError as e:
            raise StorageError("检查文件是否存在失败: {}".format(str(e)), code="EXISTS_ERROR") from e

    async def get_metadata(self, key: str) -> MetadataResult:
        """
        获取文件元数据

        Raises:
            MetadataError: 对象不存在或请求失败时抛出
        """
        try:
            blob = await self._run_in_executor(self._bucket.get_blob, key)
        except GoogleAPIError as e:
            logger.error("GCS获取元数据失败", exception=e, key=key)
            raise MetadataError("获取文件元数据失败: {}".format(str(e))) from e

        if blob is None:
            raise MetadataError("文件不存在: {}".format(key), details={'key': key})

        return MetadataResult(
            content_type=blob.content_type or '',
            content_length=blob.size or 0,
            etag=blob.etag,
            last_modified=blob.updated,
            metadata=dict(blob.metadata or {})
        )

    async def make_public(self, key: str) -> None:
        """
        授予allUsers读权限

        Raises:
            PublicAccessError: 设置失败时抛出（例如存储桶启用了统一访问控制）
        """
        try:
            await self._run_in_executor(self._bucket.blob(key).make_public)
        except GoogleAPIError as e:
            logger.error("GCS设置公开读失败", exception=e, key=key)
            raise PublicAccessError("设置公开读失败: {}".format(str(e)), details={'key': key}) from e

    def public_url(self, key: str) -> str:
        """构建公开访问URL: https://storage.googleapis.com/{bucket}/{key}"""
        return "{base}/{bucket}/{key}".format(
            base=settings.gcs_public_base_url.rstrip('/'),
            bucket=self.bucket_name,
            key=quote(key, safe='/')
        )


__all__ = ['GcsAdapter']
