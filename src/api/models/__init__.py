"""API request and response models."""

from __future__ import annotations

from .datasource import ColumnResponse, DatabaseSchema, DataSourceRequest, DataSourceResponse
from .error import ErrorResponse
from .graph import (
    CypherQueryRequest,
    CypherQueryResponse,
    GraphEdge,
    GraphNode,
    GraphResponse,
    ProjectRecordsRequest,
)
from .health import HealthResponse
from .mapping import MappingRequest, MappingResponse

__all__ = [
    "ColumnResponse",
    "CypherQueryRequest",
    "CypherQueryResponse",
    "DatabaseSchema",
    "DataSourceRequest",
    "DataSourceResponse",
    "ErrorResponse",
    "GraphEdge",
    "GraphNode",
    "GraphResponse",
    "HealthResponse",
    "MappingRequest",
    "MappingResponse",
    "ProjectRecordsRequest",
]
