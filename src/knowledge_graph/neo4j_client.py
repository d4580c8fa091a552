"""
Neo4j Graph Database Client.

This module owns the connection to the graph store. The driver is created
once per process; every operation acquires its own session in a ``with``
block so the session is released on every exit path, including errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from neo4j import Driver, GraphDatabase, Query
from neo4j.exceptions import AuthError, DriverError, Neo4jError, ServiceUnavailable

from ..utils.exceptions import ConfigurationError, GraphDatabaseError
from .values import QueryRecord, decode_value

logger = logging.getLogger(__name__)

_COUNTER_FIELDS = (
    "nodes_created",
    "nodes_deleted",
    "relationships_created",
    "relationships_deleted",
    "properties_set",
    "labels_added",
    "labels_removed",
    "indexes_added",
    "indexes_removed",
    "constraints_added",
    "constraints_removed",
)


@dataclass
class Neo4jConfig:
    """Neo4j connection configuration."""

    uri: str
    username: str
    password: str
    database: str = "neo4j"


@dataclass
class QueryResult:
    """Decoded records of one query plus a plain summary."""

    records: List[QueryRecord] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)


def summarize(summary: Any) -> Dict[str, Any]:
    """Flatten a driver ResultSummary into JSON-friendly values."""
    counters = getattr(summary, "counters", None)
    return {
        "query_type": getattr(summary, "query_type", None),
        "database": getattr(summary, "database", None),
        "counters": {name: getattr(counters, name, 0) for name in _COUNTER_FIELDS},
        "result_available_after": getattr(summary, "result_available_after", None),
        "result_consumed_after": getattr(summary, "result_consumed_after", None),
    }


def _error_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error) or type(error).__name__


class Neo4jGraphClient:
    """
    Client for Neo4j graph database operations.

    Provides methods for:
    - Running arbitrary explorer queries
    - Parameterized reads and writes used by the stores
    - Constraint setup and connectivity checks
    """

    def __init__(self, uri: str, username: str, password: str, database: str = "neo4j"):
        """
        Initialize the Neo4j client.

        Args:
            uri: Neo4j connection URI (e.g., bolt://localhost:7687)
            username: Neo4j username
            password: Neo4j password
            database: Database name (default: neo4j)
        """
        self.uri = uri
        self.username = username
        self.database = database

        try:
            self.driver: Driver = GraphDatabase.driver(
                uri, auth=(username, password), max_connection_lifetime=3600
            )
            self.driver.verify_connectivity()
            logger.info(f"[+] Connected to Neo4j at {uri}")
        except (ServiceUnavailable, AuthError) as e:
            logger.error(f"[!] Failed to connect to Neo4j: {e}")
            raise

    @classmethod
    def from_config(cls, neo4j_config: Neo4jConfig) -> "Neo4jGraphClient":
        return cls(
            uri=neo4j_config.uri,
            username=neo4j_config.username,
            password=neo4j_config.password,
            database=neo4j_config.database,
        )

    def close(self):
        """Close the Neo4j driver connection."""
        if self.driver:
            self.driver.close()
            logger.info("[*] Neo4j connection closed")

    def verify_connectivity(self) -> bool:
        """Return True if the server answers, False otherwise."""
        try:
            self.driver.verify_connectivity()
            return True
        except (DriverError, Neo4jError) as e:
            logger.warning(f"Neo4j connectivity check failed: {e}")
            return False

    def _execute_query(self, query: str, parameters: dict = None) -> list:
        """
        Execute a Cypher read and return results as plain dicts.

        Args:
            query: Cypher query string
            parameters: Query parameters

        Returns:
            List of result records

        Raises:
            GraphDatabaseError: If the driver or server rejects the query
        """
        try:
            with self.driver.session(database=self.database) as session:
                result = session.run(query, parameters or {})
                return [record.data() for record in result]
        except (Neo4jError, DriverError) as e:
            logger.error(f"Neo4j query failed: {e}")
            raise GraphDatabaseError(_error_message(e)) from e

    def _execute_write(self, query: str, parameters: dict = None) -> list:
        """
        Execute a write transaction.

        Args:
            query: Cypher query string
            parameters: Query parameters

        Returns:
            List of result records

        Raises:
            GraphDatabaseError: If the driver or server rejects the write
        """
        try:
            with self.driver.session(database=self.database) as session:
                result = session.execute_write(
                    lambda tx: list(tx.run(query, parameters or {}))
                )
                return [record.data() for record in result]
        except (Neo4jError, DriverError) as e:
            logger.error(f"Neo4j write failed: {e}")
            raise GraphDatabaseError(_error_message(e)) from e

    # ==================== Explorer Queries ====================

    def run_cypher(
        self,
        query: str,
        parameters: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> QueryResult:
        """
        Run a caller-supplied query and decode every field.

        The query text is opaque here. Node and relationship values are
        decoded into graph values right away so nothing downstream has to
        inspect driver objects.

        Args:
            query: Cypher query string
            parameters: Query parameters
            timeout: Transaction timeout in seconds (None for server default)

        Returns:
            QueryResult with records in result order and field order

        Raises:
            GraphDatabaseError: If the query fails for any reason
        """
        cypher = Query(query, timeout=timeout) if timeout else query

        try:
            with self.driver.session(database=self.database) as session:
                result = session.run(cypher, parameters or {})
                records = [
                    {key: decode_value(value) for key, value in record.items()}
                    for record in result
                ]
                summary = summarize(result.consume())
        except (Neo4jError, DriverError) as e:
            logger.error(f"Explorer query failed: {e}")
            raise GraphDatabaseError(_error_message(e)) from e

        logger.debug(f"Explorer query returned {len(records)} records")
        return QueryResult(records=records, summary=summary)

    # ==================== Setup ====================

    def create_constraints(self):
        """
        Create uniqueness constraints for application-owned nodes.
        """
        constraints = [
            "CREATE CONSTRAINT user_username IF NOT EXISTS FOR (u:User) REQUIRE u.username IS UNIQUE",
            "CREATE CONSTRAINT user_id IF NOT EXISTS FOR (u:User) REQUIRE u.id IS UNIQUE",
            "CREATE CONSTRAINT datasource_id IF NOT EXISTS FOR (ds:DataSource) REQUIRE ds.id IS UNIQUE",
            "CREATE CONSTRAINT mapping_id IF NOT EXISTS FOR (m:Mapping) REQUIRE m.id IS UNIQUE",
        ]

        for constraint_query in constraints:
            try:
                self._execute_write(constraint_query)
                logger.info(f"[+] Ensured constraint: {constraint_query[:60]}...")
            except GraphDatabaseError as e:
                logger.warning(f"[i] Could not create constraint: {e}")


# ==================== Helper Functions ====================


def create_neo4j_client(neo4j_config: Neo4jConfig) -> Neo4jGraphClient:
    """
    Create a Neo4j client, validating the configuration first.

    Returns:
        Initialized Neo4j client

    Raises:
        ConfigurationError: If URI or username is missing
    """
    if not all([neo4j_config.uri, neo4j_config.username]):
        raise ConfigurationError("Missing required Neo4j settings: NEO4J_URI, NEO4J_USERNAME")

    return Neo4jGraphClient.from_config(neo4j_config)
