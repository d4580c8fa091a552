"""
Application constants for the Graph Mapper backend.

This module contains magic numbers, default values, and configuration
constants used throughout the application.
"""

from __future__ import annotations

# Node colors for the graph explorer, indexed by a hash of the first label
NODE_COLOR_PALETTE = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E9",
)

# Query execution
DEFAULT_QUERY_TIMEOUT_SECONDS = 30.0
DEFAULT_EXPLORER_QUERY = "MATCH (n) RETURN n LIMIT 10"

# Property values nested deeper than this are truncated when serialized
MAX_NESTING_DEPTH = 64
TRUNCATED_VALUE = "..."

# Relational introspection
DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"
DEFAULT_LOGIN_TIMEOUT_SECONDS = 15
SCHEMA_COLUMNS_QUERY = """
    SELECT
        TABLE_NAME,
        COLUMN_NAME,
        DATA_TYPE,
        IS_NULLABLE
    FROM INFORMATION_SCHEMA.COLUMNS
    ORDER BY TABLE_NAME, ORDINAL_POSITION
"""

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

# Database configuration
NEO4J_DEFAULT_DATABASE = "neo4j"
