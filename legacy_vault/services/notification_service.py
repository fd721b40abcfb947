"""Notification dispatcher.

No SMS or email gateway is wired in yet; messages are written to the log
according to the user's channel flags.
"""

from __future__ import annotations

import logging

from legacy_vault.models.user import User
from legacy_vault.models.wellbeing_settings import WellbeingSettings

logger = logging.getLogger(__name__)


def dispatch_alert(user: User, settings: WellbeingSettings | None, message: str) -> list[str]:
    """Send `message` on every enabled channel. Returns the channels used."""
    channels: list[str] = []
    sms_on = settings.enable_sms if settings is not None else True
    email_on = settings.enable_email if settings is not None else True
    if sms_on and user.mobile_number:
        logger.info("SMS alert to user=%s mobile=%s%s: %s", user.id, user.country_code, user.mobile_number, message)
        channels.append("sms")
    if email_on and user.email:
        logger.info("Email alert to user=%s email=%s: %s", user.id, user.email, message)
        channels.append("email")
    if not channels:
        logger.warning("No notification channel enabled for user=%s", user.id)
    return channels
