"""
存储抽象基类
定义统一的存储接口，支持多种存储后端
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from app.core.storage.models import DownloadResult, MetadataResult, UploadResult


class BaseStorage(ABC):
    """存储抽象基类"""

    # 适配器名称，用于工厂模式注册
    ADAPTER_NAME: str = ""

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        key: str,
        mime_type: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> UploadResult:
        """
        上传文件，已存在的对象不会被覆盖

        Args:
            data: 文件数据
            key: 存储键
            mime_type: MIME类型
            metadata: 可选的自定义元数据

        Returns:
            UploadResult: 上传结果

        Raises:
            UploadError: 上传失败时抛出
        """

    @abstractmethod
    async def download(self, key: str) -> DownloadResult:
        """
        下载文件（含Content-Type）

        Raises:
            DownloadError: 下载失败时抛出
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """检查文件是否存在"""

    @abstractmethod
    async def get_metadata(self, key: str) -> MetadataResult:
        """
        获取文件元数据

        Raises:
            MetadataError: 获取元数据失败时抛出
        """

    @abstractmethod
    async def make_public(self, key: str) -> None:
        """
        将对象设置为公开可读

        Raises:
            PublicAccessError: 设置失败时抛出
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """返回对象的公开访问URL"""


__all__ = ['BaseStorage']
