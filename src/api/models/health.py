"""Health and status models."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str  # healthy, degraded
    services: Dict[str, str]
    environment: str
    timestamp: str
