"""
Storage layer for application-owned records kept in the graph store.

Components:
- Neo4jMappingStore: column-to-graph mappings
- DataSourceStore: registered relational data sources
- UserStore: user accounts with bcrypt password hashes
"""

from __future__ import annotations

from .datasource_store import DataSource, DataSourceStore
from .mapping_store import Mapping, MappingStore, Neo4jMappingStore
from .user_store import UserAccount, UserStore

__all__ = [
    "DataSource",
    "DataSourceStore",
    "Mapping",
    "MappingStore",
    "Neo4jMappingStore",
    "UserAccount",
    "UserStore",
]
