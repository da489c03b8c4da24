"""Health check endpoint. No database access; used for liveness probes."""

from fastapi import APIRouter, Request

from changetrack.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus the dispatcher state."""
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        return HealthResponse()
    return HealthResponse(
        dispatcher="running" if dispatcher.is_running else "stopped",
        dropped_signals=dispatcher.dropped,
    )
