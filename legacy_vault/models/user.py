"""User model."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from legacy_vault.db.base import Base


class User(Base):
    """Registered account owner. Deactivation is a status change, never a delete."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("wellbeing_counter >= 0", name="ck_users_wellbeing_counter_non_negative"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    mobile_number: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True, index=True)
    country_code: Mapped[str] = mapped_column(String(6), nullable=False, default="+91")
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)  # NULL until a password is set
    account_status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")  # active | suspended | deactivated
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wellbeing_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    last_wellbeing_check: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @property
    def is_active(self) -> bool:
        return self.account_status == "active"
