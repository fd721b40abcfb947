"""Mood entry schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class MoodEntryCreate(BaseModel):
    mood: str = Field(min_length=1, max_length=50)
    intensity: int = Field(ge=1, le=10, description="Intensity 1-10")
    notes: str | None = None
    context: str | None = None


class MoodEntryResponse(BaseModel):
    id: int
    user_id: int
    mood: str
    intensity: int
    notes: str | None
    context: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class MoodCount(BaseModel):
    mood: str
    count: int
    average_intensity: float


class MoodStatsResponse(BaseModel):
    window_days: int
    total_entries: int
    moods: list[MoodCount] = []


class MoodInsightsResponse(BaseModel):
    overall_trend: str
    emotional_patterns: list[str]
    recommendations: list[str]
    risk_factors: list[str]
    positive_indicators: list[str]
    confidence: float = Field(ge=0, le=1)


class MoodRecommendationRequest(BaseModel):
    mood: str = Field(min_length=1, max_length=50)
    intensity: int = Field(ge=1, le=10)
    context: str | None = Field(default=None, max_length=500)


class MoodRecommendationResponse(BaseModel):
    recommendation: str
