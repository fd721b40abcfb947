"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from legacy_vault.core.config import settings
from legacy_vault.core.principal import AdministratorPrincipal, Principal, RegisteredUser
from legacy_vault.core.security import decode_token
from legacy_vault.db.session import get_db
from legacy_vault.models.user import User

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def principal_from_payload(db: Session, payload: dict) -> Principal:
    """Resolve a decoded token payload to the administrator or a registered user."""
    if payload.get("role") == ADMIN_ROLE:
        return AdministratorPrincipal(email=settings.admin_email)
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid or expired token") from None
    user = db.get(User, user_id)
    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized(f"Account is {user.account_status}")
    return RegisteredUser(user)


def get_current_principal(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Principal:
    """Require an authenticated principal. Raises 401 if not authenticated."""
    if not credentials:
        raise _unauthorized("Not authenticated")
    payload = decode_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise _unauthorized("Invalid or expired token")
    return principal_from_payload(db, payload)


def get_current_user(principal: Annotated[Principal, Depends(get_current_principal)]) -> User:
    """Require a registered user (the administrator owns no records)."""
    if not isinstance(principal, RegisteredUser):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only registered users can do this",
        )
    return principal.user


def require_admin(principal: Annotated[Principal, Depends(get_current_principal)]) -> AdministratorPrincipal:
    """Require the platform administrator."""
    if not isinstance(principal, AdministratorPrincipal):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return principal
