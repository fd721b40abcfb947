"""Admin review service.

Surfaces users whose missed check-ins crossed their threshold and records
the administrator's decisions as AdminAction rows. Nothing here acts on a
flagged user automatically.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from legacy_vault.core.errors import ConflictError, NotFoundError
from legacy_vault.core.principal import AdministratorPrincipal
from legacy_vault.models.admin_action import AdminAction
from legacy_vault.models.asset import Asset
from legacy_vault.models.mood_entry import MoodEntry
from legacy_vault.models.nominee import Nominee
from legacy_vault.models.user import User
from legacy_vault.models.wellbeing_alert import WellbeingAlert
from legacy_vault.models.wellbeing_settings import WellbeingSettings
from legacy_vault.schemas.admin import AdminActionCreate, AdminActionUpdate
from legacy_vault.services.activity_service import log_activity
from legacy_vault.services.auth_service import get_user_or_404
from legacy_vault.services.nominee_service import list_nominees_for_user
from legacy_vault.services.notification_service import dispatch_alert
from legacy_vault.services.wellbeing_service import get_settings_row, list_exceeded

logger = logging.getLogger(__name__)

# Allowed status transitions for admin actions
_TRANSITIONS = {
    "pending": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


def user_summary(user: User, settings: WellbeingSettings | None) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "full_name": user.full_name,
        "mobile_number": user.mobile_number,
        "account_status": user.account_status,
        "is_verified": user.is_verified,
        "wellbeing_counter": user.wellbeing_counter,
        "max_missed_alerts": settings.max_missed_alerts if settings else None,
        "last_wellbeing_check": user.last_wellbeing_check,
        "created_at": user.created_at,
    }


def list_users(
    db: Session,
    search: str | None = None,
    account_status: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[int, list[dict]]:
    """Registered users, newest first. Returns (total matching, page)."""
    filters = []
    if search:
        pattern = f"%{search}%"
        filters.append(
            or_(User.full_name.ilike(pattern), User.email.ilike(pattern), User.mobile_number.ilike(pattern))
        )
    if account_status:
        filters.append(User.account_status == account_status)

    total = db.execute(select(func.count(User.id)).where(*filters)).scalar_one()
    stmt = (
        select(User, WellbeingSettings)
        .outerjoin(WellbeingSettings, WellbeingSettings.user_id == User.id)
        .where(*filters)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return total, [user_summary(user, settings) for user, settings in db.execute(stmt).all()]


def list_users_at_risk(db: Session) -> list[dict]:
    return [user_summary(user, settings) for user, settings in list_exceeded(db)]


def list_pending_validations(db: Session) -> list[dict]:
    """Flagged users together with the nominees who would be informed."""
    return [
        {"user": user_summary(user, settings), "nominees": list_nominees_for_user(db, user.id)}
        for user, settings in list_exceeded(db)
    ]


def get_user_detail(db: Session, user_id: int) -> dict:
    """Admin view of one user. Counts only, asset contents stay private."""
    user = get_user_or_404(db, user_id)
    settings = get_settings_row(db, user_id)

    def _count(model) -> int:
        return db.execute(select(func.count(model.id)).where(model.user_id == user_id)).scalar_one()

    return {
        "user": user_summary(user, settings),
        "alert_frequency": settings.alert_frequency if settings else None,
        "asset_count": _count(Asset),
        "nominee_count": _count(Nominee),
        "mood_entry_count": _count(MoodEntry),
        "nominees": list_nominees_for_user(db, user_id),
    }


def get_admin_stats(db: Session) -> dict:
    def _count(stmt) -> int:
        return db.execute(stmt).scalar_one()

    return {
        "total_users": _count(select(func.count(User.id))),
        "active_users": _count(select(func.count(User.id)).where(User.account_status == "active")),
        "total_assets": _count(select(func.count(Asset.id))),
        "total_nominees": _count(select(func.count(Nominee.id))),
        "users_at_risk": len(list_exceeded(db)),
        "pending_validations": _count(
            select(func.count(AdminAction.id)).where(
                AdminAction.action_type == "death_validation",
                AdminAction.status == "pending",
            )
        ),
    }


def create_admin_action(db: Session, admin: AdministratorPrincipal, data: AdminActionCreate) -> AdminAction:
    """Record an administrative decision about a user."""
    if data.target_user_id is not None:
        get_user_or_404(db, data.target_user_id)
    action = AdminAction(
        admin_identity=admin.identity,
        target_user_id=data.target_user_id,
        action_type=data.action_type,
        description=data.description,
        status=data.status,
        completed_at=datetime.now(timezone.utc) if data.status == "completed" else None,
    )
    db.add(action)
    db.flush()
    log_activity(
        db,
        category="admin",
        action=f"admin_action_{data.action_type}",
        description=data.description,
        user_id=data.target_user_id,
        admin_identity=admin.identity,
        metadata={"admin_action_id": action.id, "status": data.status},
        commit=False,
    )
    db.commit()
    db.refresh(action)
    return action


def update_admin_action(
    db: Session,
    admin: AdministratorPrincipal,
    action_id: int,
    data: AdminActionUpdate,
) -> AdminAction:
    """Move a pending action to completed or cancelled, or amend its description."""
    action = db.get(AdminAction, action_id)
    if not action:
        raise NotFoundError("Admin action not found")

    if data.status is not None and data.status != action.status:
        if data.status not in _TRANSITIONS[action.status]:
            raise ConflictError(f"Cannot change admin action from {action.status} to {data.status}")
        previous = action.status
        action.status = data.status
        if data.status == "completed":
            action.completed_at = datetime.now(timezone.utc)
        log_activity(
            db,
            category="admin",
            action="admin_action_status_changed",
            description=f"Admin action {action.id}: {previous} -> {data.status}",
            user_id=action.target_user_id,
            admin_identity=admin.identity,
            metadata={"admin_action_id": action.id, "from": previous, "to": data.status},
            commit=False,
        )
    if data.description is not None:
        action.description = data.description
    db.commit()
    db.refresh(action)
    return action


def list_admin_actions(
    db: Session,
    status: str | None = None,
    target_user_id: int | None = None,
    limit: int = 50,
) -> list[AdminAction]:
    stmt = select(AdminAction)
    if status is not None:
        stmt = stmt.where(AdminAction.status == status)
    if target_user_id is not None:
        stmt = stmt.where(AdminAction.target_user_id == target_user_id)
    stmt = stmt.order_by(AdminAction.created_at.desc(), AdminAction.id.desc()).limit(limit)
    return list(db.execute(stmt).scalars().all())


def update_user_status(
    db: Session,
    admin: AdministratorPrincipal,
    user_id: int,
    account_status: str,
    reason: str | None = None,
) -> User:
    """Suspend, deactivate or reactivate an account. Recorded as a completed admin action."""
    user = get_user_or_404(db, user_id)
    previous = user.account_status
    user.account_status = account_status
    description = reason or f"User account {account_status}"
    db.add(
        AdminAction(
            admin_identity=admin.identity,
            target_user_id=user_id,
            action_type="account_suspension" if account_status == "suspended" else "account_status_change",
            description=description,
            status="completed",
            completed_at=datetime.now(timezone.utc),
        )
    )
    log_activity(
        db,
        category="admin",
        action=f"user_{account_status}",
        description=description,
        severity="warning" if account_status != "active" else "info",
        user_id=user_id,
        admin_identity=admin.identity,
        metadata={"from": previous, "to": account_status},
        commit=False,
    )
    db.commit()
    db.refresh(user)
    logger.info("Admin %s set user=%s status %s -> %s", admin.identity, user_id, previous, account_status)
    return user


def trigger_user_alert(
    db: Session,
    admin: AdministratorPrincipal,
    user_id: int,
    message: str | None = None,
) -> WellbeingAlert:
    """Raise an admin escalation alert for a user and hand it to the dispatcher."""
    user = get_user_or_404(db, user_id)
    text = message or "Please confirm your well-being."
    alert = WellbeingAlert(user_id=user_id, alert_type="admin_escalation", message=text)
    db.add(alert)
    log_activity(
        db,
        category="admin",
        action="alert_triggered",
        description=text,
        user_id=user_id,
        admin_identity=admin.identity,
        commit=False,
    )
    db.commit()
    db.refresh(alert)
    dispatch_alert(user, get_settings_row(db, user_id), text)
    return alert
