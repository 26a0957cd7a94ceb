"""Health check models for the Clinic Records API."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


class StoreHealth(BaseModel):
    """Connectivity of one document store.

    Attributes:
        name: Store name (patients, users, clinical)
        status: Connection status
        response_time_ms: Round-trip time of the ping, when it succeeded
    """
    name: str
    status: Literal["connected", "disconnected"]
    response_time_ms: float | None = Field(None, description="Ping response time in milliseconds")


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: healthy when every store answers, degraded when some do,
            unhealthy when none do
        timestamp: Current timestamp
        version: Application version
        stores: Per-store health
    """
    status: Literal["healthy", "degraded", "unhealthy"]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str
    stores: list[StoreHealth]
