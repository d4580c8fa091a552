"""Services layer for business logic on top of the stores."""

from __future__ import annotations

from .mapping_service import MappingService
from .query_service import GraphQueryService
from .schema_service import ColumnInfo, SchemaIntrospector

__all__ = [
    "ColumnInfo",
    "GraphQueryService",
    "MappingService",
    "SchemaIntrospector",
]
