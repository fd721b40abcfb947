"""Asset service."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from legacy_vault.core.errors import NotFoundError
from legacy_vault.core.principal import Principal, owner_id
from legacy_vault.models.asset import Asset
from legacy_vault.schemas.asset import AssetCreate, AssetUpdate
from legacy_vault.services.auth_service import get_user_or_404


def create_asset(db: Session, user_id: int, data: AssetCreate) -> Asset:
    """Create an asset record for an existing user."""
    get_user_or_404(db, user_id)
    asset = Asset(user_id=user_id, **data.model_dump())
    db.add(asset)
    db.commit()
    db.refresh(asset)
    return asset


def list_assets(db: Session, principal: Principal) -> list[Asset]:
    """Assets owned by the principal, newest first."""
    user_id = owner_id(principal)
    if user_id is None:
        return []
    result = db.execute(
        select(Asset)
        .where(Asset.user_id == user_id)
        .order_by(Asset.created_at.desc(), Asset.id.desc())
    )
    return list(result.scalars().all())


def get_asset(db: Session, asset_id: int, user_id: int) -> Asset:
    asset = db.get(Asset, asset_id)
    if not asset or asset.user_id != user_id:
        raise NotFoundError("Asset not found")
    return asset


_REQUIRED_FIELDS = frozenset({"asset_type", "title", "currency", "storage_location"})


def update_asset(db: Session, asset_id: int, user_id: int, data: AssetUpdate) -> Asset:
    asset = get_asset(db, asset_id, user_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(asset, field, value)
    db.commit()
    db.refresh(asset)
    return asset


def delete_asset(db: Session, asset_id: int, user_id: int) -> None:
    asset = get_asset(db, asset_id, user_id)
    db.delete(asset)
    db.commit()
