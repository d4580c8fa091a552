"""Column mapping models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MappingRequest(BaseModel):
    """Request model for creating a mapping.

    Fields are optional here so empty or missing values reach the mapping
    service and are reported as one validation error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    datasource_id: Optional[str] = None
    table_name: Optional[str] = None
    column_name: Optional[str] = None
    node_label: Optional[str] = None
    property_name: Optional[str] = None


class MappingResponse(BaseModel):
    """A stored mapping, serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    datasource_id: str
    table_name: str
    column_name: str
    node_label: str
    property_name: str
