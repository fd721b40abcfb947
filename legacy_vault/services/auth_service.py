"""Auth service."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from legacy_vault.core.config import settings
from legacy_vault.core.errors import AuthenticationError, NotFoundError
from legacy_vault.core.principal import AdministratorPrincipal, Principal, RegisteredUser
from legacy_vault.core.security import hash_password, verify_password
from legacy_vault.models.user import User
from legacy_vault.schemas.auth import UpdateProfileRequest
from legacy_vault.services.activity_service import log_activity
from legacy_vault.services.wellbeing_service import default_settings

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get user by email."""
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def get_user_by_mobile(db: Session, mobile_number: str) -> User | None:
    """Get user by mobile number."""
    return db.execute(select(User).where(User.mobile_number == mobile_number)).scalar_one_or_none()


def create_user(
    db: Session,
    *,
    email: str,
    full_name: str,
    password: str | None = None,
    mobile_number: str | None = None,
    country_code: str = "+91",
    address: str | None = None,
    date_of_birth=None,
    with_wellbeing_settings: bool = True,
) -> User:
    """Create a user, by default with well-being settings at their defaults.

    Uniqueness of email and mobile is the caller's concern.
    """
    user = User(
        email=email,
        full_name=full_name,
        hashed_password=hash_password(password) if password else None,
        mobile_number=mobile_number,
        country_code=country_code,
        address=address,
        date_of_birth=date_of_birth,
        account_status="active",
        wellbeing_counter=0,
    )
    db.add(user)
    db.flush()
    if with_wellbeing_settings:
        db.add(default_settings(user.id))
    db.commit()
    db.refresh(user)
    return user


def _is_admin_login(identifier: str, password: str) -> bool:
    return secrets.compare_digest(identifier.lower().encode(), settings.admin_email.lower().encode()) and secrets.compare_digest(
        password.encode(), settings.admin_password.encode()
    )


def authenticate(
    db: Session,
    identifier: str,
    password: str,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> Principal:
    """Authenticate by email or mobile number and password.

    The caller's address and user agent are recorded on security log entries.
    """
    if _is_admin_login(identifier, password):
        log_activity(
            db,
            category="security",
            action="admin_login",
            description="Administrator logged in",
            admin_identity=settings.admin_email,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return AdministratorPrincipal(email=settings.admin_email)

    user = get_user_by_email(db, identifier) or get_user_by_mobile(db, identifier)
    if not user:
        raise AuthenticationError("Invalid credentials")
    if not user.hashed_password:
        raise AuthenticationError("Password not set for this account")
    if not verify_password(password, user.hashed_password):
        log_activity(
            db,
            category="security",
            action="login_failed",
            description="Wrong password",
            severity="warning",
            user_id=user.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        raise AuthenticationError(f"Account is {user.account_status}")

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return RegisteredUser(user)


def update_profile(db: Session, user: User, data: UpdateProfileRequest) -> User:
    """Update name / address of the current user."""
    if data.full_name is not None:
        user.full_name = data.full_name
    if data.address is not None:
        user.address = data.address
    db.commit()
    db.refresh(user)
    return user


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user

