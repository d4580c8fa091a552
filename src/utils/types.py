"""
Type aliases for the Graph Mapper backend.

This module defines common type aliases used throughout the application
to improve code readability.
"""

from __future__ import annotations

from typing import Any, Dict

# Common type aliases
JSON = Dict[str, Any]

# Graph types
Properties = Dict[str, Any]
PlainRecord = Dict[str, Any]
