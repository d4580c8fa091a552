"""Graph explorer endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from src.knowledge_graph.projection import GraphProjector
from src.services.query_service import GraphQueryService
from ..dependencies import get_graph_projector, get_query_service
from ..middleware.auth import get_current_user
from ..models.graph import (
    CypherQueryRequest,
    CypherQueryResponse,
    GraphResponse,
    ProjectRecordsRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["graph"], dependencies=[Depends(get_current_user)])


@router.post("/api/cypher", response_model=CypherQueryResponse)
def run_cypher(
    request: CypherQueryRequest,
    service: GraphQueryService = Depends(get_query_service),
) -> Dict[str, Any]:
    """Run a query and return its records as plain objects.

    Nodes come back as ``{identity, labels, properties}``, relationships as
    ``{identity, type, properties, start, end}``, other values unchanged.

    Raises:
        GraphDatabaseError: If the query fails; the driver message is reported.
    """
    return service.execute(request.query)


@router.post("/api/graph/query", response_model=GraphResponse)
def explore_graph(
    request: CypherQueryRequest,
    service: GraphQueryService = Depends(get_query_service),
) -> Dict[str, Any]:
    """Run a query and return the projected node/edge graph."""
    return service.explore(request.query)


@router.post("/api/graph/project", response_model=GraphResponse)
def project_records(
    request: ProjectRecordsRequest,
    projector: GraphProjector = Depends(get_graph_projector),
) -> Dict[str, Any]:
    """Project previously fetched records (``data`` of /api/cypher) onto a graph.

    Values that are neither nodes nor relationships are left out; nothing in
    the payload causes an error.
    """
    return projector.project(request.data).to_dict()
