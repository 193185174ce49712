"""
认证工具

解析外部身份服务签发的 JWT token，得到当前用户
"""

from typing import Optional, Dict, Any
from jose import JWTError, jwt
from loguru import logger

from backend.config.settings import settings


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    解码 JWT access token

    Args:
        token: JWT token 字符串

    Returns:
        解码后的数据，失败返回 None
    """
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
        return payload
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        return None
