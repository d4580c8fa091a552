"""
Mapping Model.

Validates and creates column-to-graph mappings. Persistence is delegated to
a ``MappingStore``; this service only decides what a valid mapping is.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from ..storage.mapping_store import Mapping, MappingStore
from ..utils.validators import require_fields

logger = logging.getLogger(__name__)


class MappingService:
    """Create and list mappings for a data source."""

    def __init__(self, store: MappingStore):
        self.store = store

    @staticmethod
    def validate(
        datasource_id: Optional[str],
        table_name: Optional[str],
        column_name: Optional[str],
        node_label: Optional[str],
        property_name: Optional[str],
    ) -> None:
        """Raise ValidationError naming every empty or absent mapping field."""
        require_fields(
            {
                "datasourceId": datasource_id,
                "tableName": table_name,
                "columnName": column_name,
                "nodeLabel": node_label,
                "propertyName": property_name,
            },
            entity="mapping",
        )

    def create(
        self,
        datasource_id: Optional[str],
        table_name: Optional[str],
        column_name: Optional[str],
        node_label: Optional[str],
        property_name: Optional[str],
        owner_id: str,
    ) -> Mapping:
        """
        Create a mapping.

        Args:
            datasource_id: Data source the column belongs to
            table_name: Relational table name
            column_name: Relational column name
            node_label: Target graph node label
            property_name: Target node property name
            owner_id: Id of the user creating the mapping

        Returns:
            The persisted mapping with its new id

        Raises:
            ValidationError: If any of the five fields is empty or absent
            StoreError: If the store fails to persist the mapping
        """
        self.validate(datasource_id, table_name, column_name, node_label, property_name)

        mapping = Mapping(
            id=str(uuid.uuid4()),
            datasource_id=datasource_id.strip(),
            table_name=table_name.strip(),
            column_name=column_name.strip(),
            node_label=node_label.strip(),
            property_name=property_name.strip(),
        )

        logger.debug(
            f"Mapping {mapping.table_name}.{mapping.column_name} -> "
            f"{mapping.node_label}.{mapping.property_name}"
        )
        return self.store.save(mapping, owner_id)

    def list(self, datasource_id: str, owner_id: str) -> List[Mapping]:
        """Return every mapping previously created for the data source."""
        return self.store.find_all(datasource_id, owner_id)
