"""
通用Pydantic模型
用于标准化API响应
"""

from typing import Optional, Any, Dict
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """错误响应模型"""
    success: bool = False
    message: str = "操作失败"
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
