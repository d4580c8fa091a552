"""
Data source storage layer.

Data sources describe relational databases whose schema can be browsed and
mapped. They are stored as ``:DataSource`` nodes owned by a user; the stored
password is only read back for schema introspection.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..knowledge_graph.neo4j_client import Neo4jGraphClient
from ..utils.validators import require_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSource:
    """A registered relational database."""

    id: str
    name: str
    server: str
    database: str
    username: str = ""
    password: str = ""

    @classmethod
    def from_node(cls, properties: Dict[str, Any]) -> "DataSource":
        return cls(
            id=str(properties["id"]),
            name=properties.get("name") or "",
            server=properties.get("server") or "",
            database=properties.get("database") or "",
            username=properties.get("username") or "",
            password=properties.get("password") or "",
        )

    def public_dict(self) -> Dict[str, str]:
        """Fields safe to return to clients (no password)."""
        return {
            "id": self.id,
            "name": self.name,
            "server": self.server,
            "database": self.database,
            "username": self.username,
        }


class DataSourceStore:
    """
    CRUD operations for data sources.
    """

    def __init__(self, client: Neo4jGraphClient):
        self.client = client

    def create(
        self,
        owner_id: str,
        name: str,
        server: str,
        database: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> DataSource:
        """
        Register a data source.

        Args:
            owner_id: Id of the owning user
            name: Display name
            server: SQL Server host (optionally host,port)
            database: Database name
            username: SQL login
            password: SQL password

        Returns:
            Created data source

        Raises:
            ValidationError: If name, server or database is empty
        """
        require_fields(
            {"name": name, "server": server, "database": database}, entity="datasource"
        )

        datasource = DataSource(
            id=str(uuid.uuid4()),
            name=name.strip(),
            server=server.strip(),
            database=database.strip(),
            username=username or "",
            password=password or "",
        )

        query = """
        CREATE (ds:DataSource {
            id: $id,
            name: $name,
            server: $server,
            database: $database,
            username: $username,
            password: $password,
            userId: $userId,
            createdAt: $createdAt
        })
        """

        self.client._execute_write(
            query,
            {
                "id": datasource.id,
                "name": datasource.name,
                "server": datasource.server,
                "database": datasource.database,
                "username": datasource.username,
                "password": datasource.password,
                "userId": owner_id,
                "createdAt": datetime.now(timezone.utc).isoformat(),
            },
        )

        logger.info(f"Created datasource: {datasource.id}")
        return datasource

    def list(self, owner_id: str) -> List[DataSource]:
        """
        List the owner's data sources, oldest first.
        """
        query = """
        MATCH (ds:DataSource {userId: $userId})
        RETURN ds
        ORDER BY ds.createdAt, ds.id
        """

        results = self.client._execute_query(query, {"userId": owner_id})
        return [DataSource.from_node(record["ds"]) for record in results]

    def get(self, datasource_id: str, owner_id: str) -> Optional[DataSource]:
        """
        Get a data source by ID if it belongs to the owner.

        Returns:
            DataSource or None if not found
        """
        query = """
        MATCH (ds:DataSource {id: $id, userId: $userId})
        RETURN ds
        """

        results = self.client._execute_query(
            query, {"id": datasource_id, "userId": owner_id}
        )
        if not results:
            return None
        return DataSource.from_node(results[0]["ds"])
