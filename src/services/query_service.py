"""
Explorer query service.

Runs caller-supplied queries against the graph store and shapes the result
either as plain records (tabular view) or as a projected graph.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..knowledge_graph.neo4j_client import Neo4jGraphClient
from ..knowledge_graph.projection import GraphProjector
from ..knowledge_graph.values import to_plain
from ..utils.types import JSON, PlainRecord
from ..utils.validators import require_fields

logger = logging.getLogger(__name__)


class GraphQueryService:
    """Executes explorer queries and projects their results."""

    def __init__(
        self,
        client: Neo4jGraphClient,
        projector: Optional[GraphProjector] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.projector = projector or GraphProjector()
        self.timeout = timeout

    def execute(self, query: str) -> JSON:
        """
        Run a query and return plain records.

        Returns:
            {"data": [...records as plain objects...], "summary": {...}}

        Raises:
            ValidationError: If the query is blank
            GraphDatabaseError: If the query fails
        """
        require_fields({"query": query}, entity="query")
        result = self.client.run_cypher(query, timeout=self.timeout)

        data: List[PlainRecord] = [
            {key: to_plain(value) for key, value in record.items()}
            for record in result.records
        ]
        return {"data": data, "summary": result.summary}

    def explore(self, query: str) -> JSON:
        """
        Run a query and project the result onto nodes and edges.

        Returns:
            {"nodes": [...], "edges": [...], "summary": {...}}
        """
        require_fields({"query": query}, entity="query")
        result = self.client.run_cypher(query, timeout=self.timeout)

        graph = self.projector.project(result.records)
        logger.info(
            f"Explorer query projected {len(graph.nodes)} nodes and {len(graph.edges)} edges"
        )
        return {**graph.to_dict(), "summary": result.summary}
