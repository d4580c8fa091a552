"""Health and monitoring endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter

from ..config import config
from ..dependencies import get_app_state
from ..models.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Check health of the API and the graph store.

    Returns:
        HealthResponse with overall status and individual service statuses.
    """
    state = get_app_state()

    services: Dict[str, str] = {"api": "up", "neo4j": "down"}

    if state.graph and state.graph.verify_connectivity():
        services["neo4j"] = "up"

    return HealthResponse(
        status="healthy" if services["neo4j"] == "up" else "degraded",
        services=services,
        environment=config.ENVIRONMENT,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
