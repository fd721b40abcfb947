"""Asset schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

AssetType = Literal["bank_account", "real_estate", "cryptocurrency", "investment", "loan", "other"]
StorageLocation = Literal["local", "google_drive", "digilocker"]


class AssetCreate(BaseModel):
    asset_type: AssetType
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    value: str | None = Field(default=None, max_length=64)
    currency: str = Field(default="USD", pattern="^[A-Z]{3}$")
    contact_info: str | None = None
    storage_location: StorageLocation = "local"
    access_instructions: str | None = None


class AssetUpdate(BaseModel):
    asset_type: AssetType | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    value: str | None = Field(default=None, max_length=64)
    currency: str | None = Field(default=None, pattern="^[A-Z]{3}$")
    contact_info: str | None = None
    storage_location: StorageLocation | None = None
    access_instructions: str | None = None


class AssetResponse(BaseModel):
    id: int
    user_id: int
    asset_type: str
    title: str
    description: str | None
    value: str | None
    currency: str
    contact_info: str | None
    storage_location: str
    access_instructions: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
