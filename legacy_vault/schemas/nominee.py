"""Nominee schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class NomineeCreate(BaseModel):
    full_name: str = Field(min_length=2, max_length=255)
    relationship: str = Field(min_length=1, max_length=100)
    mobile_number: str = Field(min_length=10, max_length=20, pattern=r"^\+?[0-9]+$")
    email: EmailStr | None = None


class NomineeUpdate(BaseModel):
    full_name: str | None = Field(default=None, min_length=2, max_length=255)
    relationship: str | None = Field(default=None, min_length=1, max_length=100)
    mobile_number: str | None = Field(default=None, min_length=10, max_length=20, pattern=r"^\+?[0-9]+$")
    email: EmailStr | None = None


class NomineeResponse(BaseModel):
    id: int
    user_id: int
    full_name: str
    relationship: str
    mobile_number: str
    email: str | None
    is_verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}
