"""
Utility modules for the Graph Mapper backend.

This package provides common utilities, exceptions, constants, type aliases,
validators, and logging configuration used throughout the application.
"""

from __future__ import annotations

from .constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_QUERY_TIMEOUT_SECONDS,
    NEO4J_DEFAULT_DATABASE,
    NODE_COLOR_PALETTE,
)
from .exceptions import (
    ConfigurationError,
    ConflictError,
    GraphDatabaseError,
    GraphMapperError,
    NotFoundError,
    SchemaIntrospectionError,
    StoreError,
    ValidationError,
)
from .logging_config import RequestIDFilter, get_logger, request_id_var, setup_logging
from .types import JSON, PlainRecord, Properties
from .validators import is_blank, require_fields

__all__ = [
    # Constants
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_QUERY_TIMEOUT_SECONDS",
    "NEO4J_DEFAULT_DATABASE",
    "NODE_COLOR_PALETTE",
    # Exceptions
    "ConfigurationError",
    "ConflictError",
    "GraphDatabaseError",
    "GraphMapperError",
    "NotFoundError",
    "SchemaIntrospectionError",
    "StoreError",
    "ValidationError",
    # Logging
    "RequestIDFilter",
    "get_logger",
    "request_id_var",
    "setup_logging",
    # Types
    "JSON",
    "PlainRecord",
    "Properties",
    # Validators
    "is_blank",
    "require_fields",
]
