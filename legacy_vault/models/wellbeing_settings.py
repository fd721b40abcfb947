"""Well-being settings model: alert schedule, channels and escalation threshold."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from legacy_vault.db.base import Base


class WellbeingSettings(Base):
    __tablename__ = "wellbeing_settings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    alert_frequency: Mapped[str] = mapped_column(String(10), nullable=False, default="daily")  # daily | weekly | custom
    custom_days: Mapped[int | None] = mapped_column(Integer, nullable=True)  # only for custom
    alert_time: Mapped[str] = mapped_column(String(5), nullable=False, default="09:00")  # "HH:MM"
    enable_sms: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    enable_email: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    max_missed_alerts: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    escalation_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
