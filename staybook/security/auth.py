"""
认证模块
令牌由外部身份服务签发，这里只负责解码并解析出调用方 Actor
"""
import logging
from datetime import datetime, timedelta, UTC
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from staybook.config import settings
from staybook.models.ontology import GuestRole
from staybook.security.access_policy import Actor

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(actor_id: str, role: GuestRole = GuestRole.GUEST,
                        email: Optional[str] = None,
                        name: Optional[str] = None) -> str:
    """创建 JWT token（开发与测试用，生产环境由身份服务签发）"""
    expire = datetime.now(UTC) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(actor_id),
        "role": role.value if isinstance(role, GuestRole) else str(role),
        "exp": expire
    }
    if email is not None:
        to_encode["email"] = email
    if name is not None:
        to_encode["name"] = name
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """解码 JWT token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Actor:
    """获取当前调用方"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_token(credentials.credentials)

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no subject"
        )

    try:
        role = GuestRole(payload.get("role", GuestRole.GUEST.value))
    except ValueError:
        logger.warning(f"Unknown role in token for {subject}: {payload.get('role')}")
        role = GuestRole.GUEST

    return Actor(
        id=subject,
        role=role,
        email=payload.get("email"),
        name=payload.get("name"),
    )
