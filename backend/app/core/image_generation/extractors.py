"""
生成结果图片提取
上游响应结构随API版本变化：候选列表可能为空，content/parts可能缺失，
图片数据所在字段也不固定（inline_data / data / file_data，且存在驼峰写法）。
这里用一组按优先级排列的提取策略解析响应，第一个命中的字段即为结果。
"""

import base64
import binascii
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from app.core.log_utils import get_logger

logger = get_logger(__name__)

Payload = Union[str, bytes]


class ImageExtractionError(Exception):
    """响应中无法提取图片"""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


@dataclass(frozen=True)
class ExtractedPayload:
    """提取策略命中的原始数据"""
    payload: Payload
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class ExtractedImage:
    """
    解码后的图片

    Attributes:
        data: 图片字节
        source_field: 命中的字段名
        part_index: 命中的part序号
        mime_type: 上游声明的MIME类型（可能为空）
    """
    data: bytes
    source_field: str
    part_index: int
    mime_type: Optional[str] = None


def get_field(obj: Any, *names: str) -> Any:
    """按顺序读取第一个非空字段，同时兼容dict和SDK对象"""
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def _as_payload(value: Any) -> Optional[Payload]:
    """只接受非空的str/bytes"""
    if isinstance(value, (bytes, bytearray)) and value:
        return bytes(value)
    if isinstance(value, str) and value:
        return value
    return None


def decode_payload(payload: Payload) -> bytes:
    """
    解码图片数据

    SDK返回的是已解码的bytes，REST/JSON返回的是base64字符串（可能带data URL前缀）。

    Raises:
        ValueError: base64内容非法时抛出
    """
    if isinstance(payload, bytes):
        return payload
    encoded = payload.split(",", 1)[1] if payload.startswith("data:") else payload
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"图片数据不是合法的base64编码: {e}") from e


class PartExtractor(ABC):
    """单个字段的提取策略"""

    field_name: str = ""

    @abstractmethod
    def extract(self, part: Any) -> Optional[ExtractedPayload]:
        """命中时返回原始数据，否则返回None"""


class InlineDataExtractor(PartExtractor):
    """part.inline_data.data（当前版本API）"""

    field_name = "inline_data"

    def extract(self, part: Any) -> Optional[ExtractedPayload]:
        inline_data = get_field(part, "inline_data", "inlineData")
        payload = _as_payload(get_field(inline_data, "data"))
        if payload is None:
            return None
        return ExtractedPayload(
            payload=payload,
            mime_type=get_field(inline_data, "mime_type", "mimeType")
        )


class DataFieldExtractor(PartExtractor):
    """part.data（早期版本直接放在part上）"""

    field_name = "data"

    def extract(self, part: Any) -> Optional[ExtractedPayload]:
        payload = _as_payload(get_field(part, "data"))
        return ExtractedPayload(payload=payload) if payload is not None else None


class FileDataExtractor(PartExtractor):
    """part.file_data，可能直接是编码数据，也可能是带data字段的对象"""

    field_name = "file_data"

    def extract(self, part: Any) -> Optional[ExtractedPayload]:
        file_data = get_field(part, "file_data", "fileData")
        payload = _as_payload(file_data)
        if payload is None:
            payload = _as_payload(get_field(file_data, "data"))
        if payload is None:
            return None
        return ExtractedPayload(
            payload=payload,
            mime_type=get_field(file_data, "mime_type", "mimeType")
        )


# 优先级从高到低
DEFAULT_EXTRACTORS: Sequence[PartExtractor] = (
    InlineDataExtractor(),
    DataFieldExtractor(),
    FileDataExtractor(),
)


def extract_image(
    response: Any,
    extractors: Sequence[PartExtractor] = DEFAULT_EXTRACTORS
) -> ExtractedImage:
    """
    从上游响应中提取第一张图片

    只解析第一个候选结果；按part顺序遍历，每个part依次尝试各提取策略，
    第一个命中的即为结果。

    Args:
        response: 上游原始响应（SDK对象或dict）
        extractors: 提取策略，按优先级排列

    Returns:
        ExtractedImage: 解码后的图片

    Raises:
        ImageExtractionError: 响应中没有可用的图片数据
        ValueError: 图片数据无法解码
    """
    candidates = get_field(response, "candidates")
    if not candidates:
        raise ImageExtractionError("no_candidates", "响应中没有候选结果")

    content = get_field(candidates[0], "content")
    if content is None:
        raise ImageExtractionError("no_content", "候选结果中没有content")

    parts = get_field(content, "parts")
    if not parts:
        raise ImageExtractionError("no_parts", "content中没有parts")

    for part_index, part in enumerate(parts):
        for extractor in extractors:
            extracted = extractor.extract(part)
            if extracted is None:
                continue
            logger.debug(
                "在响应字段 {field_name} 中找到图片数据",
                field_name=extractor.field_name,
                part_index=part_index
            )
            return ExtractedImage(
                data=decode_payload(extracted.payload),
                source_field=extractor.field_name,
                part_index=part_index,
                mime_type=extracted.mime_type
            )

    raise ImageExtractionError("no_image_data", "响应中未找到图片数据")
