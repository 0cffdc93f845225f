"""Authentication service - JWT token handling.

Tokens are issued by the monitoring platform; this service only needs to
verify them. ``create_access_token`` exists for tooling and tests.
"""
from datetime import datetime, timedelta, timezone

from jose import jwt

from account_monitor.config import settings


def create_access_token(user_id: str, role: str, expires_minutes: int = 30) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
