"""
Knowledge Graph module for graph database operations.

This module provides the Neo4j client, the graph value types returned by
explorer queries, and the projection of query results onto nodes and edges.
"""

from __future__ import annotations

from .colors import node_color
from .neo4j_client import Neo4jConfig, Neo4jGraphClient, QueryResult, create_neo4j_client
from .projection import (
    EdgeCollector,
    GraphProjector,
    NodeRegistry,
    ProjectedEdge,
    ProjectedGraph,
    ProjectedNode,
)
from .values import (
    Identifier,
    NodeValue,
    QueryRecord,
    RelationshipValue,
    ScalarValue,
    Value,
    classify,
    decode_value,
    to_plain,
)

__all__ = [
    "EdgeCollector",
    "GraphProjector",
    "Identifier",
    "Neo4jConfig",
    "Neo4jGraphClient",
    "NodeRegistry",
    "NodeValue",
    "ProjectedEdge",
    "ProjectedGraph",
    "ProjectedNode",
    "QueryRecord",
    "QueryResult",
    "RelationshipValue",
    "ScalarValue",
    "Value",
    "classify",
    "create_neo4j_client",
    "decode_value",
    "node_color",
    "to_plain",
]
