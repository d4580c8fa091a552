"""
Custom exception hierarchy for the Graph Mapper backend.

This module defines all custom exceptions used throughout the application,
providing clear error categorization and better error handling.
"""

from __future__ import annotations


class GraphMapperError(Exception):
    """Base exception for all Graph Mapper errors."""

    pass


class ConfigurationError(GraphMapperError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(GraphMapperError):
    """Raised when a required field is empty or absent."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(GraphMapperError):
    """Raised when a referenced resource does not exist for the caller."""

    pass


class ConflictError(GraphMapperError):
    """Raised when a resource with the same natural key already exists."""

    pass


class StoreError(GraphMapperError):
    """Raised when a backing store or query executor fails."""

    pass


class GraphDatabaseError(StoreError):
    """Raised for graph database operations errors."""

    pass


class SchemaIntrospectionError(StoreError):
    """Raised when the relational schema cannot be read."""

    pass
