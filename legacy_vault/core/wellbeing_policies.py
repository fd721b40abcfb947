"""Well-being alert and escalation policy constants."""

from __future__ import annotations

# Custom interval bounds, in days (only used when frequency is "custom")
MIN_CUSTOM_DAYS = 1
MAX_CUSTOM_DAYS = 30

# Missed-alert threshold bounds
MIN_MAX_MISSED_ALERTS = 1
MAX_MAX_MISSED_ALERTS = 50

# Defaults applied at registration and returned when no settings row exists
DEFAULT_ALERT_FREQUENCY = "daily"
DEFAULT_ALERT_TIME = "09:00"
DEFAULT_MAX_MISSED_ALERTS = 15
DEFAULT_ENABLE_SMS = True
DEFAULT_ENABLE_EMAIL = True
DEFAULT_ESCALATION_ENABLED = True

# Mood stats window in days
MOOD_STATS_WINDOW_DAYS = 30
