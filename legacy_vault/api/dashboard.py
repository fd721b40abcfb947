"""Dashboard API."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from legacy_vault.core.deps import get_current_principal
from legacy_vault.core.principal import Principal, RegisteredUser
from legacy_vault.db.session import get_db
from legacy_vault.schemas.dashboard import DashboardStats
from legacy_vault.services.asset_service import list_assets
from legacy_vault.services.nominee_service import list_nominees

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Totals plus the most recent assets and nominees."""
    assets = list_assets(db, principal)
    nominees = list_nominees(db, principal)
    user = principal.user if isinstance(principal, RegisteredUser) else None
    return DashboardStats(
        total_assets=len(assets),
        total_nominees=len(nominees),
        last_check_in=user.last_wellbeing_check if user else None,
        wellbeing_counter=user.wellbeing_counter if user else 0,
        recent_assets=assets[:3],
        nominees=nominees[:3],
    )
