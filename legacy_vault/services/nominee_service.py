"""Nominee service."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from legacy_vault.core.errors import NotFoundError
from legacy_vault.core.principal import Principal, owner_id
from legacy_vault.models.nominee import Nominee
from legacy_vault.schemas.nominee import NomineeCreate, NomineeUpdate
from legacy_vault.services.auth_service import get_user_or_404


def create_nominee(db: Session, user_id: int, data: NomineeCreate) -> Nominee:
    """Create a nominee for an existing user."""
    get_user_or_404(db, user_id)
    nominee = Nominee(
        user_id=user_id,
        full_name=data.full_name,
        relationship=data.relationship,
        mobile_number=data.mobile_number,
        email=data.email,
    )
    db.add(nominee)
    db.commit()
    db.refresh(nominee)
    return nominee


def list_nominees(db: Session, principal: Principal) -> list[Nominee]:
    """Nominees owned by the principal, newest first."""
    user_id = owner_id(principal)
    if user_id is None:
        return []
    return list_nominees_for_user(db, user_id)


def list_nominees_for_user(db: Session, user_id: int) -> list[Nominee]:
    result = db.execute(
        select(Nominee)
        .where(Nominee.user_id == user_id)
        .order_by(Nominee.created_at.desc(), Nominee.id.desc())
    )
    return list(result.scalars().all())


def get_nominee(db: Session, nominee_id: int, user_id: int) -> Nominee:
    """Get a nominee the user owns. Someone else's nominee looks missing."""
    nominee = db.get(Nominee, nominee_id)
    if not nominee or nominee.user_id != user_id:
        raise NotFoundError("Nominee not found")
    return nominee


# explicit null clears optional fields; these columns keep their value instead
_REQUIRED_FIELDS = frozenset({"full_name", "relationship", "mobile_number"})


def update_nominee(db: Session, nominee_id: int, user_id: int, data: NomineeUpdate) -> Nominee:
    nominee = get_nominee(db, nominee_id, user_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(nominee, field, value)
    db.commit()
    db.refresh(nominee)
    return nominee


def delete_nominee(db: Session, nominee_id: int, user_id: int) -> None:
    nominee = get_nominee(db, nominee_id, user_id)
    db.delete(nominee)
    db.commit()
