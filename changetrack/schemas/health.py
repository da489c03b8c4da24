"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    dispatcher: str = Field(default="stopped", description="Event dispatcher state")
    dropped_signals: int = Field(default=0, description="Signals dropped since startup")
