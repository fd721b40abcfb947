"""Admin review API.

Every route requires the platform administrator. The missed/check-in routes
are also the entry point for the external alert scheduler.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from legacy_vault.core.deps import require_admin
from legacy_vault.core.principal import AdministratorPrincipal
from legacy_vault.db.session import get_db
from legacy_vault.schemas.activity import ActivityCategory, ActivityLogResponse, ActivitySeverity
from legacy_vault.schemas.admin import (
    AccountStatus,
    AdminActionCreate,
    AdminActionResponse,
    AdminActionStatus,
    AdminActionUpdate,
    AdminStats,
    AdminUserDetail,
    AdminUserList,
    AdminUserSummary,
    PendingValidation,
    TriggerAlertRequest,
    UserStatusUpdate,
)
from legacy_vault.schemas.wellbeing import CheckInResponse, MissedAlertResponse, WellbeingAlertResponse
from legacy_vault.services import admin_service
from legacy_vault.services.activity_service import list_activity_logs
from legacy_vault.services.wellbeing_service import increment_missed, record_check_in

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStats)
def get_stats(
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    return admin_service.get_admin_stats(db)


@router.get("/users", response_model=AdminUserList)
def list_users(
    search: str | None = Query(default=None, max_length=100),
    account_status: AccountStatus | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Search registered users by name, email or mobile."""
    total, users = admin_service.list_users(db, search, account_status, limit, offset)
    return AdminUserList(total=total, users=users)


@router.get("/users-at-risk", response_model=list[AdminUserSummary])
def users_at_risk(
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Users whose missed check-ins reached their threshold, most overdue first."""
    return admin_service.list_users_at_risk(db)


@router.get("/pending-validations", response_model=list[PendingValidation])
def pending_validations(
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Flagged users with their nominees, for death-validation review."""
    return admin_service.list_pending_validations(db)


@router.get("/users/{user_id}", response_model=AdminUserDetail)
def get_user_detail(
    user_id: int,
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    return admin_service.get_user_detail(db, user_id)


@router.patch("/users/{user_id}/status", response_model=AdminUserSummary)
def update_user_status(
    user_id: int,
    data: UserStatusUpdate,
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Suspend, deactivate or reactivate an account."""
    admin_service.update_user_status(db, admin, user_id, data.account_status, data.reason)
    return admin_service.get_user_detail(db, user_id)["user"]


@router.post("/users/{user_id}/missed", response_model=MissedAlertResponse)
def record_missed_alert(
    user_id: int,
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Count one missed alert window for a user."""
    counter, exceeded = increment_missed(db, user_id)
    return MissedAlertResponse(user_id=user_id, wellbeing_counter=counter, is_exceeded=exceeded)


@router.post("/users/{user_id}/check-in", response_model=CheckInResponse)
def check_in_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Record a check-in on the user's behalf after confirming they are well."""
    user, resolved = record_check_in(db, user_id)
    return CheckInResponse(
        wellbeing_counter=user.wellbeing_counter,
        last_wellbeing_check=user.last_wellbeing_check,
        resolved_alerts=resolved,
    )


@router.post("/users/{user_id}/alert", response_model=WellbeingAlertResponse, status_code=status.HTTP_201_CREATED)
def trigger_alert(
    user_id: int,
    data: TriggerAlertRequest | None = None,
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Raise a well-being alert for a user."""
    message = data.message if data else None
    return admin_service.trigger_user_alert(db, admin, user_id, message)


@router.get("/actions", response_model=list[AdminActionResponse])
def list_actions(
    action_status: AdminActionStatus | None = Query(default=None, alias="status"),
    target_user_id: int | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    return admin_service.list_admin_actions(db, action_status, target_user_id, limit)


@router.post("/actions", response_model=AdminActionResponse, status_code=status.HTTP_201_CREATED)
def create_action(
    data: AdminActionCreate,
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Record a decision about a flagged user."""
    return admin_service.create_admin_action(db, admin, data)


@router.patch("/actions/{action_id}", response_model=AdminActionResponse)
def update_action(
    action_id: int,
    data: AdminActionUpdate,
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    """Complete or cancel a pending action."""
    return admin_service.update_admin_action(db, admin, action_id, data)


@router.get("/activity-logs", response_model=list[ActivityLogResponse])
def activity_logs(
    category: ActivityCategory | None = Query(default=None),
    severity: ActivitySeverity | None = Query(default=None),
    user_id: int | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: AdministratorPrincipal = Depends(require_admin),
):
    return list_activity_logs(db, category, severity, user_id, limit)
