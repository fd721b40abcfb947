"""Nominees API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from legacy_vault.core.deps import get_current_principal, get_current_user
from legacy_vault.core.principal import Principal
from legacy_vault.db.session import get_db
from legacy_vault.models.user import User
from legacy_vault.schemas.nominee import NomineeCreate, NomineeResponse, NomineeUpdate
from legacy_vault.services.nominee_service import (
    create_nominee,
    delete_nominee,
    get_nominee,
    list_nominees,
    update_nominee,
)

router = APIRouter(prefix="/nominees", tags=["nominees"])


@router.get("", response_model=list[NomineeResponse])
def list_my_nominees(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """List current user's nominees, newest first."""
    return list_nominees(db, principal)


@router.post("", response_model=NomineeResponse, status_code=status.HTTP_201_CREATED)
def add_nominee(
    data: NomineeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Designate a nominee."""
    return create_nominee(db, current_user.id, data)


@router.get("/{nominee_id}", response_model=NomineeResponse)
def get_my_nominee(
    nominee_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_nominee(db, nominee_id, current_user.id)


@router.put("/{nominee_id}", response_model=NomineeResponse)
def edit_nominee(
    nominee_id: int,
    data: NomineeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return update_nominee(db, nominee_id, current_user.id, data)


@router.delete("/{nominee_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_nominee(
    nominee_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    delete_nominee(db, nominee_id, current_user.id)
