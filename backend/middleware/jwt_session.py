"""
JWT session management
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from config import get_settings


def create_access_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token for user

    Args:
        user: User model with user_id, email, name
        expires_delta: Override the configured lifetime

    Returns:
        JWT token string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))

    payload = {
        "sub": str(user.user_id),
        "email": user.email,
        "name": user.name,
        "exp": expire,
        "iat": now
    }

    token = jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )

    return token


def decode_access_token(token: str) -> dict:
    """
    Decode and validate JWT token

    Returns:
        Decoded payload dict

    Raises:
        jose.JWTError if token invalid/expired
    """
    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )

    return payload
