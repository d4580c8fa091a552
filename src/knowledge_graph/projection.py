"""
Graph projection of query results.

Turns an ordered sequence of query records into the node/edge dataset the
explorer renders:

- nodes are deduplicated by canonical identity, first occurrence wins
- every relationship occurrence becomes its own edge
- scalar fields are left out of the graph
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from .colors import node_color
from .values import Identifier, NodeValue, RelationshipValue, classify, to_json_safe

logger = logging.getLogger(__name__)


def _serialize_properties(properties: Dict[str, Any]) -> str:
    return json.dumps(to_json_safe(properties), indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ProjectedNode:
    """A renderable vertex."""

    id: Identifier
    label: str
    title: str
    color: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": str(self.id),
            "label": self.label,
            "title": self.title,
            "color": self.color,
        }


@dataclass(frozen=True)
class ProjectedEdge:
    """A renderable edge. ``source`` and ``target`` serialize as from/to."""

    id: Identifier
    source: Identifier
    target: Identifier
    label: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": str(self.id),
            "from": str(self.source),
            "to": str(self.target),
            "label": self.label,
            "title": self.title,
        }


@dataclass
class ProjectedGraph:
    """Nodes in first-seen order and edges in encounter order."""

    nodes: List[ProjectedNode] = field(default_factory=list)
    edges: List[ProjectedEdge] = field(default_factory=list)

    def dangling_edges(self) -> List[ProjectedEdge]:
        """Edges with an endpoint that is not among the projected nodes."""
        node_ids = {node.id for node in self.nodes}
        return [
            edge
            for edge in self.edges
            if edge.source not in node_ids or edge.target not in node_ids
        ]

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


class NodeRegistry:
    """Collects distinct nodes keyed by canonical identity."""

    def __init__(self) -> None:
        self._nodes: Dict[Identifier, NodeValue] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, identity: object) -> bool:
        return identity in self._nodes

    def add(self, node: NodeValue) -> bool:
        """Register a node unless its identity is already known.

        Later occurrences of a known identity are ignored, even when their
        properties differ.

        Returns:
            True if the node was newly registered.
        """
        if node.identity in self._nodes:
            return False
        self._nodes[node.identity] = node
        return True

    @staticmethod
    def display_label(node: NodeValue) -> str:
        """Caption for a node: name, then id property, then first label, then identity."""
        for candidate in (
            node.properties.get("name"),
            node.properties.get("id"),
            node.labels[0] if node.labels else None,
        ):
            # Falsy values (empty strings, 0) fall through to the next candidate
            if candidate:
                return str(candidate)
        return str(node.identity)

    def materialize(self) -> List[ProjectedNode]:
        return [
            ProjectedNode(
                id=node.identity,
                label=self.display_label(node),
                title=_serialize_properties(node.properties),
                color=node_color(node.labels[0] if node.labels else ""),
            )
            for node in self._nodes.values()
        ]


class EdgeCollector:
    """Turns every relationship occurrence into an edge."""

    def __init__(self) -> None:
        self._edges: List[ProjectedEdge] = []

    def __len__(self) -> int:
        return len(self._edges)

    def add(self, relationship: RelationshipValue) -> ProjectedEdge:
        """Emit one edge; repeated identities and unknown endpoints are kept."""
        edge = ProjectedEdge(
            id=relationship.identity,
            source=relationship.start,
            target=relationship.end,
            label=relationship.type,
            title=_serialize_properties(relationship.properties),
        )
        self._edges.append(edge)
        return edge

    def materialize(self) -> List[ProjectedEdge]:
        return list(self._edges)


class GraphProjector:
    """
    Projects query records onto a node/edge graph.

    Holds no state between calls: each ``project`` call builds its own
    registry and collector, so one instance can serve concurrent requests.
    """

    def project(self, records: Iterable[Mapping[str, Any]]) -> ProjectedGraph:
        """
        Project records into a graph.

        Args:
            records: Query records in result order. Field values may be raw
                JSON-shaped payloads or already-decoded values.

        Returns:
            ProjectedGraph with deduplicated nodes and all edges.
        """
        registry = NodeRegistry()
        collector = EdgeCollector()
        dropped = 0

        for record in records:
            if not isinstance(record, Mapping):
                dropped += 1
                continue
            for value in record.values():
                decoded = classify(value)
                if isinstance(decoded, NodeValue):
                    registry.add(decoded)
                elif isinstance(decoded, RelationshipValue):
                    collector.add(decoded)
                else:
                    dropped += 1

        graph = ProjectedGraph(nodes=registry.materialize(), edges=collector.materialize())

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Projected {len(graph.nodes)} nodes, {len(graph.edges)} edges "
                f"({dropped} non-graph values, {len(graph.dangling_edges())} dangling edges)"
            )

        return graph
