"""Graph explorer models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.utils.constants import DEFAULT_EXPLORER_QUERY


class CypherQueryRequest(BaseModel):
    """Request model for running an explorer query."""

    query: str = Field(DEFAULT_EXPLORER_QUERY, description="Opaque Cypher query text")


class CypherQueryResponse(BaseModel):
    """Records as plain objects plus the driver summary."""

    data: List[Dict[str, Any]]
    summary: Dict[str, Any] = {}


class ProjectRecordsRequest(BaseModel):
    """Request model for projecting records that were fetched earlier."""

    data: List[Any] = Field(default_factory=list, description="Query records in result order")


class GraphNode(BaseModel):
    """Projected vertex."""

    id: str
    label: str
    title: str
    color: str


class GraphEdge(BaseModel):
    """Projected edge; the source endpoint is serialized as ``from``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_: str = Field(..., alias="from")
    to: str
    label: str
    title: str


class GraphResponse(BaseModel):
    """Projected graph for the explorer."""

    nodes: List[GraphNode]
    edges: List[GraphEdge]
    summary: Optional[Dict[str, Any]] = None
