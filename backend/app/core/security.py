"""
身份认证模块
从Bearer令牌中解析调用方ID，令牌缺失或无效时返回None，由业务层决定如何拒绝
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.config import settings
from app.core.log_utils import get_logger

logger = get_logger(__name__)

# auto_error=False：没有Authorization头时不直接返回403
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(subject: str, expires_minutes: int = 60) -> str:
    """签发访问令牌（供本地调试和测试使用）"""
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"sub": subject, "exp": expire, "type": "access"}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_user_id(token: str) -> Optional[str]:
    """
    解析令牌中的用户ID

    Returns:
        Optional[str]: 令牌有效时返回sub，否则返回None
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning("令牌校验失败", exception=e)
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return subject


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[str]:
    """FastAPI依赖：返回当前调用方ID，未认证时返回None"""
    if credentials is None or not credentials.credentials:
        return None
    return decode_user_id(credentials.credentials)
