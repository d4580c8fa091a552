"""
Data source router.

Registers SQL Server data sources for the current user and exposes their
relational schema for column mapping.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from src.services.schema_service import SchemaIntrospector
from src.storage.datasource_store import DataSourceStore
from src.utils.exceptions import NotFoundError
from ..dependencies import get_datasource_store, get_schema_introspector
from ..middleware.auth import User, get_current_user
from ..models.datasource import (
    ColumnResponse,
    DatabaseSchema,
    DataSourceRequest,
    DataSourceResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/datasources", tags=["datasources"])


@router.post("", response_model=DataSourceResponse)
def create_datasource(
    body: DataSourceRequest,
    user: User = Depends(get_current_user),
    store: DataSourceStore = Depends(get_datasource_store),
) -> DataSourceResponse:
    """Register a data source owned by the current user."""
    datasource = store.create(
        owner_id=user.user_id,
        name=body.name,
        server=body.server,
        database=body.database,
        username=body.username,
        password=body.password,
    )
    return DataSourceResponse(**datasource.public_dict())


@router.get("", response_model=List[DataSourceResponse])
def list_datasources(
    user: User = Depends(get_current_user),
    store: DataSourceStore = Depends(get_datasource_store),
) -> List[DataSourceResponse]:
    """List the current user's data sources."""
    return [DataSourceResponse(**ds.public_dict()) for ds in store.list(user.user_id)]


@router.get("/{datasource_id}/schema", response_model=DatabaseSchema)
def get_datasource_schema(
    datasource_id: str,
    user: User = Depends(get_current_user),
    store: DataSourceStore = Depends(get_datasource_store),
    introspector: SchemaIntrospector = Depends(get_schema_introspector),
) -> DatabaseSchema:
    """
    Read tables and columns of a data source.

    Raises:
        NotFoundError: If the data source does not belong to the caller.
        SchemaIntrospectionError: If the database cannot be read.
    """
    datasource = store.get(datasource_id, user.user_id)
    if datasource is None:
        raise NotFoundError("Data source not found")

    schema = introspector.get_schema(datasource)
    return {
        table: [ColumnResponse(**column.to_dict()) for column in columns]
        for table, columns in schema.items()
    }
