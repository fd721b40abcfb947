"""Dashboard schema."""

from datetime import datetime

from pydantic import BaseModel

from legacy_vault.schemas.asset import AssetResponse
from legacy_vault.schemas.nominee import NomineeResponse


class DashboardStats(BaseModel):
    total_assets: int
    total_nominees: int
    last_check_in: datetime | None
    wellbeing_counter: int
    recent_assets: list[AssetResponse] = []
    nominees: list[NomineeResponse] = []
