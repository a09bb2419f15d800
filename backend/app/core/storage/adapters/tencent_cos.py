"""
腾讯云COS存储适配器
实现BaseStorage接口，提供统一的腾讯云COS存储服务
"""

import asyncio
from datetime import datetime
from functools import partial
from typing import Callable, Dict, Optional, TypeVar

from qcloud_cos import CosConfig, CosS3Client
from qcloud_cos.cos_exception import CosServiceError

from app.core.config import settings
from app.core.config.cos_config import COSConfig, get_cos_config, validate_cos_config
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

# COS自定义元数据需要以该前缀作为请求头
COS_META_PREFIX = "x-cos-meta-"


class TencentCosAdapter(BaseStorage):
    """
    腾讯云COS存储适配器

    使用腾讯云COS SDK提供对象存储服务，支持：
    - 文件上传/下载
    - 存在性与元数据查询
    - 公开读ACL设置
    """

    ADAPTER_NAME: str = "tencent_cos"

    def __init__(self, config: Optional[COSConfig] = None, client: Optional[CosS3Client] = None) -> None:
        """
        初始化COS存储客户端

        Raises:
            ConfigurationError: 配置不完整时抛出
        """
        self.config = config or get_cos_config()

        if not validate_cos_config(self.config):
            raise ConfigurationError("腾讯云COS配置不完整，请检查环境变量")

        self._client = client or self._create_client()

    def _create_client(self) -> CosS3Client:
        """创建COS客户端"""
        cos_config = CosConfig(
            Region=self.config.region,
            SecretId=self.config.secret_id,
            SecretKey=self.config.secret_key,
            Scheme=self.config.scheme,
            Timeout=self.config.timeout
        )
        return CosS3Client(cos_config)

    async def _run_in_executor(self, func: Callable[..., T], **kwargs) -> T:
        """在线程池中运行同步SDK调用"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, **kwargs))

    async def upload(
        self,
        data: bytes,
        key: str,
        mime_type: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> UploadResult:
        """
        上传文件到COS

        put_object没有生成号前置条件，先用head_object确认对象不存在，
        已存在时直接失败而不是覆盖。
        失败时按cos_retry_delay_base线性退避重试max_retries次。

        Raises:
            UploadError: 对象已存在或重试后仍然失败时抛出
            StorageError: 存在性检查失败时抛出
        """
        if await self.exists(key):
            logger.warning("COS对象已存在，拒绝覆盖", key=key)
            raise UploadError("对象已存在: {}".format(key), details={'key': key})

        upload_params = {
            'Bucket': self.config.bucket,
            'Key': key,
            'Body': data,
            'ContentType': mime_type
        }

        if metadata:
            upload_params['Metadata'] = {
                f"{COS_META_PREFIX}{name}": str(value) for name, value in metadata.items()
            }

        max_retries = self.config.max_retries

        for attempt in range(max_retries + 1):
            try:
                response = await self._run_in_executor(
                    self._client.put_object,
                    **upload_params
                )
                break
            except Exception as e:
                if attempt < max_retries:
                    await asyncio.sleep(settings.cos_retry_delay_base * (attempt + 1))
                    continue
                logger.error(
                    "COS上传失败，重试{retries}次后仍然失败",
                    exception=e,
                    retries=max_retries,
                    key=key
                )
                raise UploadError("上传文件失败: {}".format(str(e)), details={'key': key}) from e

        return UploadResult(
            key=key,
            url=self.public_url(key),
            size=len(data),
            mime_type=mime_type,
            bucket=self.config.bucket,
            etag=(response or {}).get('ETag', '').strip('"'),
            uploaded_at=datetime.now()
        )

    async def download(self, key: str) -> DownloadResult:
        """
        从COS下载文件

        Raises:
            DownloadError: 下载失败时抛出
        """
        try:
            response = await self._run_in_executor(
                self._client.get_object,
                Bucket=self.config.bucket,
                Key=key
            )
            body = response['Body']
            data = await self._run_in_executor(body.get_raw_stream().read)

            return DownloadResult(
                data=data,
                size=len(data),
                mime_type=response.get('Content-Type', ''),
                last_modified=response.get('Last-Modified'),
                etag=response.get('ETag', '').strip('"')
            )

        except Exception as e:
            logger.error("COS下载失败", exception=e, key=key)
            raise DownloadError("下载文件失败: {}".format(str(e)), details={'key': key}) from e

    async def exists(self, key: str) -> bool:
        """
        检查文件是否存在

        仅404视为不存在，其它错误（鉴权、网络）向上抛出。
        """
        try:
            await self._run_in_executor(
                self._client.head_object,
                Bucket=self.config.bucket,
                Key=key
            )
            return True
        except CosServiceError as e:
            if e.get_status_code() == 404:
                return False
            raise StorageError("检查文件是否存在失败: {}".format(str(e)), code="EXISTS_ERROR") from e

    async def get_metadata(self, key: str) -> MetadataResult:
        """
        获取文件元数据

        Raises:
            MetadataError: 获取元数据失败时抛出
        """
        try:
            response = await self._run_in_executor(
                self._client.head_object,
                Bucket=self.config.bucket,
                Key=key
            )
        except Exception as e:
            logger.error("COS获取元数据失败", exception=e, key=key)
            raise MetadataError("获取文件元数据失败: {}".format(str(e))) from e

        user_metadata = {
            header[len(COS_META_PREFIX):]: value
            for header, value in response.items()
            if header.lower().startswith(COS_META_PREFIX)
        }
        return MetadataResult(
            content_type=response.get('Content-Type', ''),
            content_length=int(response.get('Content-Length', 0) or 0),
            etag=response.get('ETag', '').strip('"'),
            last_modified=response.get('Last-Modified'),
            metadata=user_metadata
        )

    async def make_public(self, key: str) -> None:
        """
        设置对象ACL为public-read

        Raises:
            PublicAccessError: 设置失败时抛出
        """
        try:
            await self._run_in_executor(
                self._client.put_object_acl,
                Bucket=self.config.bucket,
                Key=key,
                ACL='public-read'
            )
        except Exception as e:
            logger.error("COS设置公开读失败", exception=e, key=key)
            raise PublicAccessError("设置公开读失败: {}".format(str(e)), details={'key': key}) from e

    def public_url(self, key: str) -> str:
        """构建COS公开访问URL"""
        return "https://{bucket}.cos.{region}.myqcloud.com/{key}".format(
            bucket=self.config.bucket,
            region=self.config.region,
            key=key
        )


__all__ = ['TencentCosAdapter']
