"""
ID生成工具模块
"""

import uuid


def generate_uuid() -> str:
    """生成不带连字符的UUID字符串，可直接用于存储路径"""
    return uuid.uuid4().hex

