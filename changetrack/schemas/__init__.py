"""API request/response schemas (pydantic)."""

from changetrack.schemas.activity import (
    ActivityItemResponse,
    ActivityListResponse,
    PaginationResponse,
)
from changetrack.schemas.health import HealthResponse

__all__ = [
    "ActivityItemResponse",
    "ActivityListResponse",
    "HealthResponse",
    "PaginationResponse",
]
