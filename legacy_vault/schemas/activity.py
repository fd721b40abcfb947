"""Activity log schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ActivityCategory = Literal["user", "admin", "system", "security"]
ActivitySeverity = Literal["info", "warning", "error", "critical"]


class ActivityLogResponse(BaseModel):
    id: int
    category: str
    action: str
    description: str
    severity: str
    user_id: int | None
    admin_identity: str | None
    details: dict[str, Any] | None = Field(default=None, serialization_alias="metadata")
    ip_address: str | None
    user_agent: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
