"""Assets API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from legacy_vault.core.deps import get_current_principal, get_current_user
from legacy_vault.core.principal import Principal
from legacy_vault.db.session import get_db
from legacy_vault.models.user import User
from legacy_vault.schemas.asset import AssetCreate, AssetResponse, AssetUpdate
from legacy_vault.services.asset_service import create_asset, delete_asset, get_asset, list_assets, update_asset

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("", response_model=list[AssetResponse])
def list_my_assets(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """List current user's assets, newest first."""
    return list_assets(db, principal)


@router.post("", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
def add_asset(
    data: AssetCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record a new asset."""
    return create_asset(db, current_user.id, data)


@router.get("/{asset_id}", response_model=AssetResponse)
def get_my_asset(
    asset_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_asset(db, asset_id, current_user.id)


@router.put("/{asset_id}", response_model=AssetResponse)
def edit_asset(
    asset_id: int,
    data: AssetUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return update_asset(db, asset_id, current_user.id, data)


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_asset(
    asset_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    delete_asset(db, asset_id, current_user.id)
