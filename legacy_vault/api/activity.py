"""Activity log API for the current account."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from legacy_vault.core.deps import get_current_principal
from legacy_vault.core.principal import Principal
from legacy_vault.db.session import get_db
from legacy_vault.schemas.activity import ActivityLogResponse
from legacy_vault.services.activity_service import list_my_activity

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("/me", response_model=list[ActivityLogResponse])
def get_my_activity(
    limit: int = Query(default=50, ge=1, le=100),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return list_my_activity(db, principal, limit)
