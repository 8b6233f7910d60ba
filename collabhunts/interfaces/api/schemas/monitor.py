"""Pydantic models describing the scheduled trigger responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MonitorRunResponse(BaseModel):
    """Summary returned to the scheduler after a monitor pass."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    bookings_processed: int | None = Field(default=None, alias="bookingsProcessed")
    disputes_processed: int | None = Field(default=None, alias="disputesProcessed")
    notifications_sent: int | None = Field(default=None, alias="notificationsSent")
    error: str | None = None


class HealthResponse(BaseModel):
    """Liveness check payload."""

    status: str = "ok"


__all__ = ["HealthResponse", "MonitorRunResponse"]
