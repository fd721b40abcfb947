"""Well-being counter engine and settings.

Each user carries a missed check-in counter. An external scheduler calls
`increment_missed` once per unanswered alert window; the user resets it with
`record_check_in`. A user becomes a candidate for administrative review when
escalation is enabled and the counter reaches the configured threshold.
Counter writes are single UPDATE statements so a concurrent check-in and
missed-alert increment cannot lose each other's effect.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Float, cast, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from legacy_vault.core.errors import NotFoundError, ValidationError
from legacy_vault.core.principal import Principal, owner_id
from legacy_vault.core.wellbeing_policies import (
    DEFAULT_ALERT_FREQUENCY,
    DEFAULT_ALERT_TIME,
    DEFAULT_ENABLE_EMAIL,
    DEFAULT_ENABLE_SMS,
    DEFAULT_ESCALATION_ENABLED,
    DEFAULT_MAX_MISSED_ALERTS,
)
from legacy_vault.models.user import User
from legacy_vault.models.wellbeing_alert import WellbeingAlert
from legacy_vault.models.wellbeing_settings import WellbeingSettings
from legacy_vault.schemas.wellbeing import WellbeingSettingsUpdate, check_custom_days
from legacy_vault.services.activity_service import log_activity

logger = logging.getLogger(__name__)


def _get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_settings_row(db: Session, user_id: int) -> WellbeingSettings | None:
    """Stored settings for a user, or None when never configured."""
    stmt = select(WellbeingSettings).where(WellbeingSettings.user_id == user_id)
    return db.execute(stmt).scalar_one_or_none()


def default_settings(user_id: int) -> WellbeingSettings:
    """Unsaved settings object holding the platform defaults."""
    return WellbeingSettings(
        user_id=user_id,
        alert_frequency=DEFAULT_ALERT_FREQUENCY,
        custom_days=None,
        alert_time=DEFAULT_ALERT_TIME,
        enable_sms=DEFAULT_ENABLE_SMS,
        enable_email=DEFAULT_ENABLE_EMAIL,
        max_missed_alerts=DEFAULT_MAX_MISSED_ALERTS,
        escalation_enabled=DEFAULT_ESCALATION_ENABLED,
        is_active=True,
    )


def is_exceeded(counter: int, settings: WellbeingSettings | None) -> bool:
    """Escalation eligibility for a counter under the given settings.

    Users without settings, or with a non-positive threshold, are not
    evaluated at all. Disabled escalation masks the numeric condition.
    """
    if settings is None:
        return False
    if settings.max_missed_alerts is None or settings.max_missed_alerts <= 0:
        logger.warning(
            "Skipping escalation check: invalid threshold %s for user=%s",
            settings.max_missed_alerts,
            settings.user_id,
        )
        return False
    if not settings.escalation_enabled:
        return False
    return counter >= settings.max_missed_alerts


def record_check_in(db: Session, user_id: int) -> tuple[User, int]:
    """Reset the missed counter and resolve open alerts. Returns (user, resolved alert count)."""
    now = datetime.now(timezone.utc)
    result = db.execute(
        update(User)
        .where(User.id == user_id)
        .values(wellbeing_counter=0, last_wellbeing_check=now)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("User not found")

    resolved = db.execute(
        update(WellbeingAlert)
        .where(WellbeingAlert.user_id == user_id, WellbeingAlert.is_resolved.is_(False))
        .values(is_resolved=True, resolved_at=now)
        .execution_options(synchronize_session=False)
    ).rowcount

    log_activity(
        db,
        category="user",
        action="wellbeing_check_in",
        description="User confirmed well-being",
        user_id=user_id,
        metadata={"resolved_alerts": resolved},
        commit=False,
    )
    db.commit()
    user = db.get(User, user_id)
    db.refresh(user)
    logger.info("Check-in recorded for user=%s (resolved %s alerts)", user_id, resolved)
    return user, resolved


def increment_missed(db: Session, user_id: int) -> tuple[int, bool]:
    """Count one missed alert window. Returns (new counter, exceeded)."""
    new_count = db.execute(
        update(User)
        .where(User.id == user_id)
        .values(wellbeing_counter=User.wellbeing_counter + 1)
        .returning(User.wellbeing_counter)
        .execution_options(synchronize_session=False)
    ).scalar_one_or_none()
    if new_count is None:
        db.rollback()
        raise NotFoundError("User not found")

    settings = get_settings_row(db, user_id)
    exceeded = is_exceeded(new_count, settings)

    db.add(
        WellbeingAlert(
            user_id=user_id,
            alert_type="missed_check_in",
            message=f"Missed well-being check-in ({new_count} in a row)",
        )
    )
    if exceeded and new_count == settings.max_missed_alerts:
        logger.warning(
            "User=%s reached missed check-in threshold (%s/%s)",
            user_id,
            new_count,
            settings.max_missed_alerts,
        )
        log_activity(
            db,
            category="system",
            action="wellbeing_threshold_exceeded",
            description="Missed check-ins reached the escalation threshold",
            severity="warning",
            user_id=user_id,
            metadata={"counter": new_count, "threshold": settings.max_missed_alerts},
            commit=False,
        )
    db.commit()
    return new_count, exceeded


def list_exceeded(db: Session) -> list[tuple[User, WellbeingSettings]]:
    """Users eligible for administrative review, most overdue first.

    Ordered by counter/threshold descending, then user id.
    """
    ratio = cast(User.wellbeing_counter, Float) / WellbeingSettings.max_missed_alerts
    stmt = (
        select(User, WellbeingSettings)
        .join(WellbeingSettings, WellbeingSettings.user_id == User.id)
        .where(
            WellbeingSettings.escalation_enabled.is_(True),
            WellbeingSettings.max_missed_alerts > 0,
            User.wellbeing_counter >= WellbeingSettings.max_missed_alerts,
        )
        .order_by(ratio.desc(), User.id.asc())
    )
    return [(user, settings) for user, settings in db.execute(stmt).all()]


def get_settings(db: Session, user_id: int) -> tuple[WellbeingSettings, bool]:
    """Settings for display. Returns (settings, is_configured)."""
    _get_user(db, user_id)
    stored = get_settings_row(db, user_id)
    if stored is None:
        return default_settings(user_id), False
    return stored, True


def _apply_settings(stored: WellbeingSettings, data: WellbeingSettingsUpdate) -> None:
    frequency = data.alert_frequency or stored.alert_frequency
    custom_days = None
    if frequency == "custom":
        candidate = data.custom_days if data.custom_days is not None else stored.custom_days
        try:
            custom_days = check_custom_days(candidate)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    stored.alert_frequency = frequency
    stored.custom_days = custom_days
    for field in ("alert_time", "enable_sms", "enable_email", "max_missed_alerts", "escalation_enabled", "is_active"):
        value = getattr(data, field)
        if value is not None:
            setattr(stored, field, value)


def _log_settings_update(db: Session, user_id: int, data: WellbeingSettingsUpdate) -> None:
    log_activity(
        db,
        category="user",
        action="wellbeing_settings_updated",
        description="Well-being settings updated",
        user_id=user_id,
        metadata=data.model_dump(exclude_none=True),
        commit=False,
    )


def update_settings(db: Session, user_id: int, data: WellbeingSettingsUpdate) -> WellbeingSettings:
    """Apply a settings change. The missed counter is left as it is.

    Two first-time updates may race to insert the row. The loser re-reads
    the winner's row and applies its change on top, so the last write wins.
    """
    _get_user(db, user_id)
    stored = get_settings_row(db, user_id)
    if stored is None:
        stored = default_settings(user_id)
        _apply_settings(stored, data)
        db.add(stored)
    else:
        _apply_settings(stored, data)
    _log_settings_update(db, user_id, data)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        stored = get_settings_row(db, user_id)
        if stored is None:
            raise
        logger.info("Settings for user=%s were created concurrently; updating the stored row", user_id)
        _apply_settings(stored, data)
        _log_settings_update(db, user_id, data)
        db.commit()
    db.refresh(stored)
    return stored


def get_wellbeing_status(db: Session, user: User) -> dict:
    """Counter, threshold and eligibility for one user."""
    settings = get_settings_row(db, user.id)
    return {
        "wellbeing_counter": user.wellbeing_counter,
        "max_missed_alerts": settings.max_missed_alerts if settings else None,
        "escalation_enabled": bool(settings and settings.escalation_enabled),
        "last_wellbeing_check": user.last_wellbeing_check,
        "is_exceeded": is_exceeded(user.wellbeing_counter, settings),
    }


def list_alerts(db: Session, principal: Principal, include_resolved: bool = True) -> list[WellbeingAlert]:
    """Alerts for the principal's account, newest first."""
    user_id = owner_id(principal)
    if user_id is None:
        return []
    stmt = select(WellbeingAlert).where(WellbeingAlert.user_id == user_id)
    if not include_resolved:
        stmt = stmt.where(WellbeingAlert.is_resolved.is_(False))
    stmt = stmt.order_by(WellbeingAlert.created_at.desc(), WellbeingAlert.id.desc())
    return list(db.execute(stmt).scalars().all())
