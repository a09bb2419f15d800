"""
存储服务数据模型
定义存储操作中使用的所有数据结构
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional


@dataclass(frozen=True)
class UploadResult:
    """
    上传结果

    Attributes:
        key: 存储键
        url: 对象访问URL（公开读之前不一定可以匿名访问）
        size: 文件大小（字节）
        mime_type: MIME类型
        bucket: 存储桶名称
        etag: 文件ETag
        uploaded_at: 上传时间
    """
    key: str
    url: str
    size: int
    mime_type: str
    bucket: Optional[str] = None
    etag: Optional[str] = None
    uploaded_at: Optional[datetime] = None


@dataclass(frozen=True)
class DownloadResult:
    """
    下载结果

    Attributes:
        data: 文件数据
        size: 文件大小（字节）
        mime_type: MIME类型，对象未声明时为空字符串
        last_modified: 最后修改时间
        etag: 文件ETag
    """
    data: bytes
    size: int
    mime_type: str
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None


@dataclass(frozen=True)
class MetadataResult:
    """
    元数据查询结果

    Attributes:
        content_type: MIME类型
        content_length: 文件大小（字节）
        etag: 文件ETag
        last_modified: 最后修改时间
        metadata: 用户自定义元数据
    """
    content_type: str
    content_length: int
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    metadata: Dict[str, str] = field(default_factory=dict)


__all__ = ['UploadResult', 'DownloadResult', 'MetadataResult']
