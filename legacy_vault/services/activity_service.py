"""Activity log service."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from legacy_vault.core.principal import Principal, owner_id
from legacy_vault.models.activity_log import ActivityLog

CATEGORIES = ("user", "admin", "system", "security")
SEVERITIES = ("info", "warning", "error", "critical")
MAX_LOGS = 100


def log_activity(
    db: Session,
    category: str,
    action: str,
    description: str,
    severity: str = "info",
    user_id: int | None = None,
    admin_identity: str | None = None,
    metadata: dict[str, Any] | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    commit: bool = True,
) -> ActivityLog:
    """Append an audit entry. Pass commit=False to ride on the caller's transaction."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown activity category: {category}")
    if severity not in SEVERITIES:
        raise ValueError(f"Unknown activity severity: {severity}")
    entry = ActivityLog(
        category=category,
        action=action,
        description=description,
        severity=severity,
        user_id=user_id,
        admin_identity=admin_identity,
        details=metadata,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    db.add(entry)
    if commit:
        db.commit()
        db.refresh(entry)
    return entry


def list_activity_logs(
    db: Session,
    category: str | None = None,
    severity: str | None = None,
    user_id: int | None = None,
    limit: int = MAX_LOGS,
) -> list[ActivityLog]:
    """All activity logs, newest first, optionally filtered. Admin view."""
    stmt = select(ActivityLog)
    if category is not None:
        stmt = stmt.where(ActivityLog.category == category)
    if severity is not None:
        stmt = stmt.where(ActivityLog.severity == severity)
    if user_id is not None:
        stmt = stmt.where(ActivityLog.user_id == user_id)
    stmt = stmt.order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc()).limit(min(limit, MAX_LOGS))
    return list(db.execute(stmt).scalars().all())


def list_my_activity(db: Session, principal: Principal, limit: int = 50) -> list[ActivityLog]:
    """Activity recorded against the principal's own account."""
    user_id = owner_id(principal)
    if user_id is None:
        return []
    return list_activity_logs(db, user_id=user_id, limit=limit)
