"""
Mapping storage layer.

A mapping associates one relational column with one graph node label and
property name. Mappings are stored as ``:Mapping`` nodes in the graph store,
scoped to the user who created them.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Protocol, runtime_checkable

from ..knowledge_graph.neo4j_client import Neo4jGraphClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mapping:
    """Column to node-property association."""

    id: str
    datasource_id: str
    table_name: str
    column_name: str
    node_label: str
    property_name: str

    @classmethod
    def from_node(cls, properties: Dict[str, Any]) -> "Mapping":
        """Build a mapping from stored ``:Mapping`` node properties."""
        return cls(
            id=str(properties["id"]),
            datasource_id=str(properties["datasourceId"]),
            table_name=str(properties["tableName"]),
            column_name=str(properties["columnName"]),
            node_label=str(properties["nodeLabel"]),
            property_name=str(properties["propertyName"]),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@runtime_checkable
class MappingStore(Protocol):
    """Persistence interface for mappings."""

    def save(self, mapping: Mapping, owner_id: str) -> Mapping:
        """Persist a new mapping and return the stored record."""
        ...

    def find_all(self, datasource_id: str, owner_id: str) -> List[Mapping]:
        """Return the owner's mappings for a datasource, oldest first."""
        ...


class Neo4jMappingStore:
    """
    Mapping persistence backed by the graph store.

    No uniqueness is enforced on (datasource, table, column); the same column
    may be mapped more than once.
    """

    def __init__(self, client: Neo4jGraphClient):
        self.client = client

    def save(self, mapping: Mapping, owner_id: str) -> Mapping:
        """
        Create a ``:Mapping`` node.

        Args:
            mapping: Mapping to persist (id already assigned)
            owner_id: Id of the user creating the mapping

        Returns:
            The stored mapping

        Raises:
            GraphDatabaseError: If the write fails
        """
        query = """
        CREATE (m:Mapping {
            id: $id,
            datasourceId: $datasourceId,
            tableName: $tableName,
            columnName: $columnName,
            nodeLabel: $nodeLabel,
            propertyName: $propertyName,
            userId: $userId,
            createdAt: $createdAt
        })
        RETURN m
        """

        results = self.client._execute_write(
            query,
            {
                "id": mapping.id,
                "datasourceId": mapping.datasource_id,
                "tableName": mapping.table_name,
                "columnName": mapping.column_name,
                "nodeLabel": mapping.node_label,
                "propertyName": mapping.property_name,
                "userId": owner_id,
                "createdAt": datetime.now(timezone.utc).isoformat(),
            },
        )

        logger.info(f"Created mapping {mapping.id} for datasource {mapping.datasource_id}")
        if results and results[0].get("m"):
            return Mapping.from_node(results[0]["m"])
        return mapping

    def find_all(self, datasource_id: str, owner_id: str) -> List[Mapping]:
        """
        List mappings for a datasource.

        Args:
            datasource_id: Datasource the mappings belong to
            owner_id: Id of the requesting user

        Returns:
            Mappings ordered by creation time
        """
        query = """
        MATCH (m:Mapping {datasourceId: $datasourceId, userId: $userId})
        RETURN m
        ORDER BY m.createdAt, m.id
        """

        results = self.client._execute_query(
            query, {"datasourceId": datasource_id, "userId": owner_id}
        )
        return [Mapping.from_node(record["m"]) for record in results]
