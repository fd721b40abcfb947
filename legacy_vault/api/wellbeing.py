"""Well-being check-in, settings and alerts API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from legacy_vault.core.deps import get_current_principal, get_current_user
from legacy_vault.core.principal import Principal
from legacy_vault.db.session import get_db
from legacy_vault.models.user import User
from legacy_vault.schemas.wellbeing import (
    CheckInResponse,
    WellbeingAlertResponse,
    WellbeingSettingsResponse,
    WellbeingSettingsUpdate,
    WellbeingStatusResponse,
)
from legacy_vault.services.notification_service import dispatch_alert
from legacy_vault.services.wellbeing_service import (
    get_settings,
    get_settings_row,
    get_wellbeing_status,
    list_alerts,
    record_check_in,
    update_settings,
)

router = APIRouter(prefix="/wellbeing", tags=["wellbeing"])


@router.post("/confirm", response_model=CheckInResponse)
def confirm_wellbeing(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Check in: reset the missed counter and resolve open alerts."""
    user, resolved = record_check_in(db, current_user.id)
    return CheckInResponse(
        wellbeing_counter=user.wellbeing_counter,
        last_wellbeing_check=user.last_wellbeing_check,
        resolved_alerts=resolved,
    )


@router.get("/status", response_model=WellbeingStatusResponse)
def get_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Current counter against the configured threshold."""
    return get_wellbeing_status(db, current_user)


@router.get("/settings", response_model=WellbeingSettingsResponse)
def get_my_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get current user's settings, or the defaults if never configured."""
    settings, configured = get_settings(db, current_user.id)
    response = WellbeingSettingsResponse.model_validate(settings)
    response.is_configured = configured
    return response


@router.put("/settings", response_model=WellbeingSettingsResponse)
def update_my_settings(
    data: WellbeingSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update current user's settings. Progress towards the threshold is kept."""
    return update_settings(db, current_user.id, data)


@router.post("/test-alert")
def send_test_alert(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Send a test alert on the user's enabled channels."""
    channels = dispatch_alert(current_user, get_settings_row(db, current_user.id), "This is a test well-being alert.")
    return {"status": "sent", "channels": channels}


@router.get("/alerts", response_model=list[WellbeingAlertResponse])
def get_my_alerts(
    open_only: bool = Query(default=False),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Alerts for the current account, newest first."""
    return list_alerts(db, principal, include_resolved=not open_only)
