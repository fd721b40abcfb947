"""Mood tracking API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from legacy_vault.core.deps import get_current_principal, get_current_user
from legacy_vault.core.principal import Principal
from legacy_vault.db.session import get_db
from legacy_vault.models.user import User
from legacy_vault.schemas.mood import (
    MoodEntryCreate,
    MoodEntryResponse,
    MoodInsightsResponse,
    MoodRecommendationRequest,
    MoodRecommendationResponse,
    MoodStatsResponse,
)
from legacy_vault.services.insights_service import generate_emotional_insights, generate_mood_recommendation
from legacy_vault.services.mood_service import (
    create_mood_entry,
    get_latest_mood_entry,
    get_mood_stats,
    list_mood_entries,
)

router = APIRouter(prefix="/mood", tags=["mood"])


@router.post("/entries", response_model=MoodEntryResponse, status_code=status.HTTP_201_CREATED)
def add_mood_entry(
    data: MoodEntryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Log a mood entry."""
    return create_mood_entry(db, current_user.id, data)


@router.get("/entries", response_model=list[MoodEntryResponse])
def get_my_mood_entries(
    limit: int = Query(default=30, ge=1, le=100),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Get mood entries, newest first. Default limit 30."""
    return list_mood_entries(db, principal, limit)


@router.get("/latest", response_model=MoodEntryResponse | None)
def get_my_latest_mood(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return get_latest_mood_entry(db, principal)


@router.get("/stats", response_model=MoodStatsResponse)
def get_my_mood_stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Mood distribution over the last 30 days."""
    return get_mood_stats(db, principal)


@router.get("/insights", response_model=MoodInsightsResponse)
def get_my_mood_insights(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """AI summary of recent mood entries. Returns a no-data summary when there are none."""
    return generate_emotional_insights(db, principal)


@router.post("/recommendation", response_model=MoodRecommendationResponse)
def get_mood_recommendation(
    data: MoodRecommendationRequest,
    principal: Principal = Depends(get_current_principal),
):
    """Short advice for the mood the user is in right now."""
    return MoodRecommendationResponse(
        recommendation=generate_mood_recommendation(data.mood, data.intensity, data.context)
    )
