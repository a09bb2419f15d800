"""
日期时间工具模块
提供统一的日期时间处理函数
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """获取当前UTC时间（带时区）"""
    return datetime.now(timezone.utc)


def to_iso_string(dt: datetime) -> str:
    """
    转换为ISO-8601字符串，毫秒精度，UTC时间以Z结尾

    Args:
        dt: 日期时间对象，无时区时按UTC处理

    Returns:
        str: 形如 2024-01-01T08:00:00.000Z 的字符串
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
