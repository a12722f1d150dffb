"""API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# === Request Schemas ===


class DescriptionRequest(BaseModel):
    """Description text to merge a status block into"""

    text: str = Field(..., description="Original quest description")


class SettingsUpdate(BaseModel):
    """Global display switch"""

    enabled: bool


class VisibilityUpdate(BaseModel):
    """Profile visibility toggle"""

    visible: bool


# === Response Schemas ===


class QuestStatusEntry(BaseModel):
    """One profile's status for one quest (client wire format)"""

    model_config = ConfigDict(populate_by_name=True)

    status: int = Field(..., alias="Status")
    locked_reason: Optional[str] = Field(None, alias="LockedReason")


StatusTablePayload = dict[str, dict[str, QuestStatusEntry]]
QuestStatusesPayload = dict[str, QuestStatusEntry]


class DescriptionResponse(BaseModel):
    """Merged description"""

    quest_id: str
    text: str


class SettingsResponse(BaseModel):
    """Current display settings"""

    enabled: bool
    excluded_profiles: list[str] = []


class ProfileVisibility(BaseModel):
    """Known profile and whether it is shown"""

    profile_name: str
    visible: bool


class ErrorResponse(BaseModel):
    """Error response"""

    detail: str
