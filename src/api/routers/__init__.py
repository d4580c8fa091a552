"""API routers for the Graph Mapper backend."""

from __future__ import annotations

from . import (
    auth,
    datasources,
    graph,
    health,
    mappings,
)

__all__ = [
    "auth",
    "datasources",
    "graph",
    "health",
    "mappings",
]
