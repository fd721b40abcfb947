"""Password hashing and JWT utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from legacy_vault.core.config import settings

ACCESS = "access"
REFRESH = "refresh"


def hash_password(password: str) -> str:
    """Hash a plain password."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain password against a hash."""
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _secret_for(token_type: str) -> str:
    return settings.jwt_refresh_secret if token_type == REFRESH else settings.jwt_secret


def _create_token(subject: str | int, token_type: str, minutes: int, extra: dict[str, Any] | None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(subject),
        "type": token_type,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "exp": now + timedelta(minutes=minutes),
        "iat": now,
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, _secret_for(token_type), algorithm=settings.jwt_algorithm)


def create_access_token(subject: str | int, extra: dict[str, Any] | None = None) -> str:
    """Create a short-lived JWT access token."""
    return _create_token(subject, ACCESS, settings.jwt_expire_minutes, extra)


def create_refresh_token(subject: str | int, extra: dict[str, Any] | None = None) -> str:
    """Create a long-lived JWT refresh token."""
    return _create_token(subject, REFRESH, settings.jwt_refresh_expire_minutes, extra)


def create_token_pair(subject: str | int, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    """Access + refresh tokens, shaped for TokenResponse."""
    return {
        "access_token": create_access_token(subject, extra),
        "refresh_token": create_refresh_token(subject, extra),
        "expires_in": settings.jwt_expire_minutes * 60,
    }


def decode_token(token: str, token_type: str = ACCESS) -> dict[str, Any] | None:
    """Decode and validate a JWT of the given type. Returns payload or None if invalid."""
    try:
        payload = jwt.decode(
            token,
            _secret_for(token_type),
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError:
        return None
    if payload.get("type") != token_type:
        return None
    return payload
