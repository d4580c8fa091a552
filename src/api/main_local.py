"""
Graph Mapper API.

Backs the mapping and explorer UI:
- Users, data sources and mappings are stored in Neo4j
- SQL Server schemas are read on demand over ODBC
- Explorer queries run against the same Neo4j database
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from src.knowledge_graph.neo4j_client import (
    Neo4jConfig,
    Neo4jGraphClient,
    create_neo4j_client,
)
from src.utils.logging_config import setup_logging

from .config import config
from .middleware import (
    setup_cors,
    setup_error_handlers,
    setup_rate_limiting,
)
from .routers import (
    auth,
    datasources,
    graph,
    health,
    mappings,
)

logger = logging.getLogger(__name__)


# ==================== Application State ====================


class AppState:
    """Global application state container."""

    graph: Optional[Neo4jGraphClient] = None


state = AppState()


# ==================== Lifespan ====================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup resources.

    Connects to Neo4j and ensures constraints. A failed connection is
    logged and the API starts anyway; store-backed routes answer 503 and
    /health reports degraded until restart.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    setup_logging(level=config.LOG_LEVEL)
    logger.info(f"[*] Starting Graph Mapper API ({config.ENVIRONMENT})...")

    logger.info(
        f"[*] Connecting to Neo4j at {config.NEO4J_URI} as {config.NEO4J_USERNAME} "
        f"(password {config.mask_sensitive(config.NEO4J_PASSWORD)})..."
    )
    try:
        state.graph = create_neo4j_client(
            Neo4jConfig(
                uri=config.NEO4J_URI,
                username=config.NEO4J_USERNAME,
                password=config.NEO4J_PASSWORD,
                database=config.NEO4J_DATABASE,
            )
        )
        state.graph.create_constraints()
    except Exception as e:
        logger.error(f"[!] WARNING: Neo4j is not available: {e}")
        logger.error("[!] Store-backed endpoints will answer 503")
        state.graph = None

    logger.info("[+] Startup complete")

    yield

    logger.info("[*] Shutting down gracefully...")
    if state.graph:
        state.graph.close()
        state.graph = None

    logger.info("[+] Shutdown complete")


# ==================== FastAPI App ====================

app = FastAPI(
    title="Graph Mapper",
    description="Map relational columns onto graph labels and explore the Neo4j graph",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup middleware
setup_cors(app)
setup_error_handlers(app)
setup_rate_limiting(app)

# Register routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(datasources.router)
app.include_router(mappings.router)
app.include_router(graph.router)
