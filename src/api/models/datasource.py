"""Data source and schema models."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class DataSourceRequest(BaseModel):
    """Request model for registering a SQL Server data source."""

    name: Optional[str] = None
    server: Optional[str] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = Field(None, description="Stored for introspection, never returned")


class DataSourceResponse(BaseModel):
    """Data source as returned to clients."""

    id: str
    name: str
    server: str
    database: str
    username: str = ""


class ColumnResponse(BaseModel):
    """One relational column."""

    name: str
    type: str
    nullable: bool


DatabaseSchema = Dict[str, List[ColumnResponse]]
