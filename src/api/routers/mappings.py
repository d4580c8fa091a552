"""
Mapping router.

Creates and lists column-to-graph mappings for a data source.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from src.services.mapping_service import MappingService
from src.storage.datasource_store import DataSourceStore
from src.utils.exceptions import NotFoundError
from ..dependencies import get_datasource_store, get_mapping_service
from ..middleware.auth import User, get_current_user
from ..models.mapping import MappingRequest, MappingResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mappings", tags=["mappings"])


@router.post("", response_model=MappingResponse)
def create_mapping(
    body: MappingRequest,
    user: User = Depends(get_current_user),
    service: MappingService = Depends(get_mapping_service),
    datasources: DataSourceStore = Depends(get_datasource_store),
) -> MappingResponse:
    """
    Map a relational column onto a node label and property.

    Raises:
        ValidationError: If any field is empty or missing.
        NotFoundError: If the data source does not belong to the caller.
    """
    fields = body.model_dump(by_alias=False)
    service.validate(**fields)
    if datasources.get(body.datasource_id, user.user_id) is None:
        raise NotFoundError("Data source not found")

    mapping = service.create(**fields, owner_id=user.user_id)
    return MappingResponse(**mapping.to_dict())


@router.get("/{datasource_id}", response_model=List[MappingResponse])
def list_mappings(
    datasource_id: str,
    user: User = Depends(get_current_user),
    service: MappingService = Depends(get_mapping_service),
) -> List[MappingResponse]:
    """List the current user's mappings for a data source."""
    return [MappingResponse(**mapping.to_dict()) for mapping in service.list(datasource_id, user.user_id)]
