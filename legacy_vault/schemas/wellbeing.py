"""Well-being settings, status and alert schemas."""

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from legacy_vault.core.wellbeing_policies import (
    MAX_CUSTOM_DAYS,
    MAX_MAX_MISSED_ALERTS,
    MIN_CUSTOM_DAYS,
    MIN_MAX_MISSED_ALERTS,
)

AlertFrequency = Literal["daily", "weekly", "custom"]

# ASCII digits only; str.isdigit also accepts other scripts
_TIME_RE = re.compile(r"([01][0-9]|2[0-3]):[0-5][0-9]")


def check_custom_days(custom_days: int | None) -> int:
    """Custom frequency needs a day count within bounds."""
    if custom_days is None:
        raise ValueError("custom_days is required when alert_frequency is custom")
    if not (MIN_CUSTOM_DAYS <= custom_days <= MAX_CUSTOM_DAYS):
        raise ValueError(f"custom_days must be between {MIN_CUSTOM_DAYS} and {MAX_CUSTOM_DAYS}")
    return custom_days


class WellbeingSettingsUpdate(BaseModel):
    """Partial update. Omitted fields keep their stored value."""

    alert_frequency: AlertFrequency | None = None
    custom_days: int | None = Field(default=None, description="Days between alerts, only for custom frequency")
    alert_time: str | None = Field(default=None, description="HH:MM format, e.g. 09:00")
    enable_sms: bool | None = None
    enable_email: bool | None = None
    max_missed_alerts: int | None = Field(default=None, ge=MIN_MAX_MISSED_ALERTS, le=MAX_MAX_MISSED_ALERTS)
    escalation_enabled: bool | None = None
    is_active: bool | None = Field(default=None, description="Pause or resume scheduled alerts")

    @field_validator("alert_time")
    @classmethod
    def validate_time_format(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not _TIME_RE.fullmatch(v):
            raise ValueError("Must be HH:MM format")
        return v

    @model_validator(mode="after")
    def validate_custom_days(self) -> "WellbeingSettingsUpdate":
        if self.alert_frequency == "custom":
            check_custom_days(self.custom_days)
        elif self.alert_frequency is not None:
            self.custom_days = None
        return self


class WellbeingSettingsResponse(BaseModel):
    alert_frequency: str
    custom_days: int | None
    alert_time: str
    enable_sms: bool
    enable_email: bool
    max_missed_alerts: int
    escalation_enabled: bool
    is_active: bool
    is_configured: bool = True

    model_config = {"from_attributes": True}


class WellbeingStatusResponse(BaseModel):
    wellbeing_counter: int
    max_missed_alerts: int | None
    escalation_enabled: bool
    last_wellbeing_check: datetime | None
    is_exceeded: bool


class CheckInResponse(BaseModel):
    wellbeing_counter: int
    last_wellbeing_check: datetime
    resolved_alerts: int


class MissedAlertResponse(BaseModel):
    user_id: int
    wellbeing_counter: int
    is_exceeded: bool


class WellbeingAlertResponse(BaseModel):
    id: int
    user_id: int
    alert_type: str
    message: str
    is_resolved: bool
    resolved_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}
