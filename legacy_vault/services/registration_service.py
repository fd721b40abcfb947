"""Two-step registration.

Step 1 stores identity and contact details in MongoDB under a random token
that expires after `registration_ttl_seconds`. Step 2 redeems the token
with credentials and creates the user. The pending record lives outside the
process so any API instance can complete a registration another started.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from legacy_vault.core.config import settings
from legacy_vault.core.errors import ConflictError, ValidationError
from legacy_vault.models.user import User
from legacy_vault.schemas.auth import RegistrationStep1Request, RegistrationStep2Request
from legacy_vault.services.activity_service import log_activity
from legacy_vault.services.auth_service import create_user, get_user_by_email, get_user_by_mobile
from legacy_vault.services.mongo_client import get_registrations_collection

logger = logging.getLogger(__name__)

SESSION_EXPIRED = "Please complete step 1 first or session expired"


async def ensure_indexes() -> None:
    """TTL index lets MongoDB purge stale records; lookups still check expiry themselves."""
    collection = get_registrations_collection()
    await collection.create_index("expires_at", expireAfterSeconds=0)
    await collection.create_index("token", unique=True)


async def start_registration(db: Session, data: RegistrationStep1Request) -> tuple[str, datetime]:
    """Validate step 1 and park it. Returns (token, expires_at)."""
    if get_user_by_mobile(db, data.mobile_number):
        raise ConflictError("Mobile number already registered")

    now = datetime.now(timezone.utc)
    token = secrets.token_urlsafe(32)
    expires_at = now + timedelta(seconds=settings.registration_ttl_seconds)
    await get_registrations_collection().insert_one(
        {
            "token": token,
            "step1": data.model_dump(mode="json"),
            "created_at": now,
            "expires_at": expires_at,
        }
    )
    logger.info("Registration step 1 stored (expires %s)", expires_at.isoformat())
    return token, expires_at


async def complete_registration(
    db: Session,
    data: RegistrationStep2Request,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> User:
    """Redeem a step 1 token with credentials and create the user."""
    collection = get_registrations_collection()
    pending = await collection.find_one({"token": data.registration_token})
    if not pending:
        raise ValidationError(SESSION_EXPIRED)
    if pending["expires_at"] <= datetime.now(timezone.utc):
        await collection.delete_one({"token": data.registration_token})
        raise ValidationError(SESSION_EXPIRED)

    step1 = RegistrationStep1Request.model_validate(pending["step1"])
    if get_user_by_email(db, data.email):
        raise ConflictError("Email already registered")
    if get_user_by_mobile(db, step1.mobile_number):
        raise ConflictError("Mobile number already registered")

    try:
        user = create_user(
            db,
            email=data.email,
            password=data.password,
            full_name=step1.full_name,
            mobile_number=step1.mobile_number,
            country_code=step1.country_code,
            address=step1.address,
            date_of_birth=step1.date_of_birth,
        )
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Email or mobile number already registered") from exc

    await collection.delete_one({"token": data.registration_token})
    log_activity(
        db,
        category="user",
        action="user_registered",
        description="New account registered",
        user_id=user.id,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    logger.info("Registered user=%s", user.id)
    return user
