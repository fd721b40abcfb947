"""Mood tracking service."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from legacy_vault.core.principal import Principal, owner_id
from legacy_vault.core.wellbeing_policies import MOOD_STATS_WINDOW_DAYS
from legacy_vault.models.mood_entry import MoodEntry
from legacy_vault.schemas.mood import MoodEntryCreate
from legacy_vault.services.auth_service import get_user_or_404


def create_mood_entry(db: Session, user_id: int, data: MoodEntryCreate) -> MoodEntry:
    """Append a mood entry. Entries are never edited afterwards."""
    get_user_or_404(db, user_id)
    entry = MoodEntry(
        user_id=user_id,
        mood=data.mood,
        intensity=data.intensity,
        notes=data.notes,
        context=data.context,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_mood_entries(db: Session, principal: Principal, limit: int = 30) -> list[MoodEntry]:
    """Mood entries, newest first."""
    user_id = owner_id(principal)
    if user_id is None:
        return []
    stmt = (
        select(MoodEntry)
        .where(MoodEntry.user_id == user_id)
        .order_by(desc(MoodEntry.created_at), desc(MoodEntry.id))
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_latest_mood_entry(db: Session, principal: Principal) -> MoodEntry | None:
    entries = list_mood_entries(db, principal, limit=1)
    return entries[0] if entries else None


def get_mood_stats(db: Session, principal: Principal, days: int = MOOD_STATS_WINDOW_DAYS) -> dict:
    """Entry counts and average intensity per mood over the last `days` days."""
    user_id = owner_id(principal)
    stats = {"window_days": days, "total_entries": 0, "moods": []}
    if user_id is None:
        return stats

    since = datetime.now(timezone.utc) - timedelta(days=days)
    stmt = (
        select(MoodEntry.mood, func.count(MoodEntry.id), func.avg(MoodEntry.intensity))
        .where(MoodEntry.user_id == user_id, MoodEntry.created_at >= since)
        .group_by(MoodEntry.mood)
        .order_by(func.count(MoodEntry.id).desc(), MoodEntry.mood)
    )
    for mood, count, avg_intensity in db.execute(stmt).all():
        stats["moods"].append({"mood": mood, "count": count, "average_intensity": round(float(avg_intensity), 2)})
        stats["total_entries"] += count
    return stats
