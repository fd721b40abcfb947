"""Emotional insights and mood recommendations from the AI provider."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from legacy_vault.core.config import settings
from legacy_vault.core.errors import UpstreamServiceError
from legacy_vault.core.principal import Principal
from legacy_vault.services.ai_service import AIServiceError, generate_structured
from legacy_vault.services.mood_service import list_mood_entries

logger = logging.getLogger(__name__)

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

INSIGHTS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": [
        "overall_trend",
        "emotional_patterns",
        "recommendations",
        "risk_factors",
        "positive_indicators",
        "confidence",
    ],
    "properties": {
        "overall_trend": {"type": "string"},
        "emotional_patterns": _STRING_LIST,
        "recommendations": _STRING_LIST,
        "risk_factors": _STRING_LIST,
        "positive_indicators": _STRING_LIST,
        "confidence": {"type": "number"},
    },
}

RECOMMENDATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["recommendation"],
    "properties": {"recommendation": {"type": "string"}},
}

NO_DATA_INSIGHTS: dict[str, Any] = {
    "overall_trend": "Insufficient data",
    "emotional_patterns": ["No mood data available for analysis"],
    "recommendations": ["Start tracking your daily mood to receive personalized insights"],
    "risk_factors": [],
    "positive_indicators": [],
    "confidence": 0.0,
}

DEFAULT_RECOMMENDATION = "Take a moment to breathe deeply and acknowledge your feelings."

_ANALYST = (
    "You are an emotional wellness analyst reviewing a mood journal. "
    "Be supportive, practical and specific."
)
_ADVISOR = "You are a compassionate emotional wellness advisor."


def generate_emotional_insights(db: Session, principal: Principal) -> dict[str, Any]:
    """Trend, patterns, recommendations and risk factors from recent mood entries."""
    entries = list_mood_entries(db, principal, limit=settings.mood_insights_max_entries)
    if not entries:
        return dict(NO_DATA_INSIGHTS)

    payload = {
        "entries": [
            {
                "mood": e.mood,
                "intensity": e.intensity,
                "context": e.context or "general",
                "notes": e.notes or "",
                "date": e.created_at.date().isoformat(),
            }
            for e in entries
        ]
    }
    try:
        result = generate_structured(
            task=(
                "Analyse these mood entries (intensity 1-10, newest first). Summarise the overall "
                "emotional trend, list recurring patterns, practical recommendations, risk factors "
                "that need attention and positive indicators to reinforce. Set confidence between "
                "0 and 1 according to how much data there is and how consistent it is."
            ),
            payload=payload,
            schema=INSIGHTS_SCHEMA,
            system=_ANALYST,
        )
    except AIServiceError as exc:
        logger.error("Emotional insights failed for %s entries: %s", len(entries), exc)
        raise UpstreamServiceError("Failed to generate emotional insights") from exc

    result["confidence"] = min(1.0, max(0.0, float(result["confidence"])))
    return {key: result[key] for key in INSIGHTS_SCHEMA["required"]}


def generate_mood_recommendation(mood: str, intensity: int, context: str | None = None) -> str:
    """Two or three sentences of immediate advice. Falls back to a fixed suggestion."""
    try:
        result = generate_structured(
            task=(
                "Give a brief, supportive and actionable recommendation (2-3 sentences) for "
                "someone in this emotional state. Focus on steps they can take right now."
            ),
            payload={"mood": mood, "intensity": intensity, "context": context},
            schema=RECOMMENDATION_SCHEMA,
            system=_ADVISOR,
        )
    except AIServiceError as exc:
        logger.warning("Mood recommendation unavailable: %s", exc)
        return DEFAULT_RECOMMENDATION
    return result["recommendation"].strip() or DEFAULT_RECOMMENDATION
