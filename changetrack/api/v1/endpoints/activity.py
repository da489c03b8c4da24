"""Employee activity API: paginated change history of one employee profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from changetrack.api.v1.dependencies import get_actor_id, get_audit_reader
from changetrack.application.services.audit_reader import AuditReader
from changetrack.schemas.activity import (
    ActivityItemResponse,
    ActivityListResponse,
    PaginationResponse,
)

router = APIRouter()


@router.get("/{owner_id}/activity", response_model=ActivityListResponse)
async def list_employee_activity(
    owner_id: str,
    reader: Annotated[AuditReader, Depends(get_audit_reader)],
    _actor: Annotated[str | None, Depends(get_actor_id)],
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1, description="Defaults to DEFAULT_PAGE_SIZE"),
    referrable_type_id: str | None = Query(None, description="Only activity on this record"),
    search: str | None = Query(None, description="Case-insensitive match on the activity path"),
):
    """List an employee's activity, newest first."""
    result = await reader.list(
        owner_id,
        page=page,
        page_size=page_size,
        referrable_type_id=referrable_type_id,
        search=search,
    )
    return ActivityListResponse(
        data=[ActivityItemResponse.model_validate(item) for item in result.data],
        pagination=PaginationResponse.model_validate(result.pagination),
    )
