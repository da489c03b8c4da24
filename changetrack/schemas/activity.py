"""Response schemas for the employee activity API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaginationResponse(BaseModel):
    """Offset pagination block."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    current_page: int
    per_page: int
    total_pages: int


class ActivityItemResponse(BaseModel):
    """One audited action with rendered change messages."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    activity: str
    action_type: int
    action: str
    referrable_type_id: str | None = None
    referrable_label: str | None = None
    action_by: str | None = None
    created_at: str
    change_log: list[str]
    entries: list[dict[str, Any]] = Field(default_factory=list)


class ActivityListResponse(BaseModel):
    """Page of activity plus pagination."""

    data: list[ActivityItemResponse]
    pagination: PaginationResponse
