"""
Validation utilities for the Graph Mapper backend.

This module provides validation functions for submitted data to ensure
data integrity before anything is persisted.
"""

from __future__ import annotations

from typing import Any, Dict

from .exceptions import ValidationError


def is_blank(value: Any) -> bool:
    """Return True for None, non-strings and whitespace-only strings."""
    return not isinstance(value, str) or not value.strip()


def require_fields(fields: Dict[str, Any], entity: str = "record") -> None:
    """
    Validate that every named field holds a non-empty string.

    Args:
        fields: Mapping of field name to submitted value
        entity: Entity name used in the error message

    Raises:
        ValidationError: Listing every empty or absent field

    Example:
        >>> require_fields({"name": "orders", "server": ""}, entity="datasource")
        Traceback (most recent call last):
        ...
        ValidationError: Missing required datasource fields: server
    """
    missing = [name for name, value in fields.items() if is_blank(value)]

    if missing:
        raise ValidationError(
            f"Missing required {entity} fields: {', '.join(missing)}",
            fields=missing,
        )
