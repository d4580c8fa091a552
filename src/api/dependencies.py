"""
FastAPI dependencies wiring routers to the graph store and services.

The Neo4j client is owned by the application state (created in the
lifespan); routers only receive it, or services built on it, through
``Depends``. Tests replace these with ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException

from src.knowledge_graph.neo4j_client import Neo4jGraphClient
from src.knowledge_graph.projection import GraphProjector
from src.services.mapping_service import MappingService
from src.services.query_service import GraphQueryService
from src.services.schema_service import SchemaIntrospector
from src.storage.datasource_store import DataSourceStore
from src.storage.mapping_store import Neo4jMappingStore
from src.storage.user_store import UserStore

from .config import config


def get_app_state() -> Any:
    """Get application state from the running app module."""
    from .main_local import state

    return state


def get_graph_client() -> Neo4jGraphClient:
    state = get_app_state()
    if not state.graph:
        raise HTTPException(status_code=503, detail="Graph database not initialized")
    return state.graph


def get_graph_projector() -> GraphProjector:
    return GraphProjector()


def get_query_service(
    graph: Neo4jGraphClient = Depends(get_graph_client),
    projector: GraphProjector = Depends(get_graph_projector),
) -> GraphQueryService:
    return GraphQueryService(
        graph, projector=projector, timeout=config.CYPHER_QUERY_TIMEOUT_SECONDS
    )


def get_mapping_service(
    graph: Neo4jGraphClient = Depends(get_graph_client),
) -> MappingService:
    return MappingService(Neo4jMappingStore(graph))


def get_datasource_store(
    graph: Neo4jGraphClient = Depends(get_graph_client),
) -> DataSourceStore:
    return DataSourceStore(graph)


def get_user_store(graph: Neo4jGraphClient = Depends(get_graph_client)) -> UserStore:
    return UserStore(graph)


def get_schema_introspector() -> SchemaIntrospector:
    return SchemaIntrospector(
        driver=config.MSSQL_ODBC_DRIVER, login_timeout=config.MSSQL_LOGIN_TIMEOUT_SECONDS
    )
