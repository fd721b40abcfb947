"""Admin review schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from legacy_vault.schemas.nominee import NomineeResponse

AccountStatus = Literal["active", "suspended", "deactivated"]
AdminActionType = Literal[
    "death_validation",
    "account_suspension",
    "account_status_change",
    "wellbeing_review",
    "other",
]
AdminActionStatus = Literal["pending", "completed", "cancelled"]


class AdminActionCreate(BaseModel):
    target_user_id: int | None = None
    action_type: AdminActionType
    description: str = Field(min_length=1)
    status: AdminActionStatus = "pending"


class AdminActionUpdate(BaseModel):
    status: Literal["completed", "cancelled"] | None = None
    description: str | None = Field(default=None, min_length=1)


class AdminActionResponse(BaseModel):
    id: int
    admin_identity: str
    target_user_id: int | None
    action_type: str
    description: str
    status: str
    created_at: datetime
    completed_at: datetime | None

    model_config = {"from_attributes": True}


class UserStatusUpdate(BaseModel):
    account_status: AccountStatus
    reason: str | None = None


class AdminUserSummary(BaseModel):
    id: int
    email: str
    full_name: str
    mobile_number: str | None
    account_status: str
    is_verified: bool
    wellbeing_counter: int
    max_missed_alerts: int | None = None
    last_wellbeing_check: datetime | None
    created_at: datetime


class AdminUserList(BaseModel):
    total: int
    users: list[AdminUserSummary]


class PendingValidation(BaseModel):
    user: AdminUserSummary
    nominees: list[NomineeResponse]


class NomineeBrief(BaseModel):
    id: int
    full_name: str
    relationship: str
    is_verified: bool

    model_config = {"from_attributes": True}


class AdminUserDetail(BaseModel):
    user: AdminUserSummary
    alert_frequency: str | None
    asset_count: int
    nominee_count: int
    mood_entry_count: int
    nominees: list[NomineeBrief]


class AdminStats(BaseModel):
    total_users: int
    active_users: int
    total_assets: int
    total_nominees: int
    users_at_risk: int
    pending_validations: int


class TriggerAlertRequest(BaseModel):
    message: str | None = Field(default=None, max_length=500)
