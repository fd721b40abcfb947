"""SQLAlchemy models."""

from __future__ import annotations

from legacy_vault.models.activity_log import ActivityLog
from legacy_vault.models.admin_action import AdminAction
from legacy_vault.models.asset import Asset
from legacy_vault.models.mood_entry import MoodEntry
from legacy_vault.models.nominee import Nominee
from legacy_vault.models.user import User
from legacy_vault.models.wellbeing_alert import WellbeingAlert
from legacy_vault.models.wellbeing_settings import WellbeingSettings

__all__ = [
    "User",
    "ActivityLog",
    "AdminAction",
    "Asset",
    "MoodEntry",
    "Nominee",
    "WellbeingAlert",
    "WellbeingSettings",
]
