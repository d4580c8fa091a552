"""
Relational schema introspection for registered data sources.

Connects to SQL Server over ODBC, reads ``INFORMATION_SCHEMA.COLUMNS`` and
groups the columns by table. A connection is opened per call and closed
before returning, whether or not the query succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from ..storage.datasource_store import DataSource
from ..utils.constants import (
    DEFAULT_LOGIN_TIMEOUT_SECONDS,
    DEFAULT_ODBC_DRIVER,
    SCHEMA_COLUMNS_QUERY,
)
from ..utils.exceptions import SchemaIntrospectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnInfo:
    """One column of a relational table."""

    name: str
    type: str
    nullable: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


Schema = Dict[str, List[ColumnInfo]]


def build_connection_string(datasource: DataSource, driver: str = DEFAULT_ODBC_DRIVER) -> str:
    """ODBC connection string for an encrypted SQL Server connection."""
    password = datasource.password.replace("}", "}}")
    parts = [
        f"DRIVER={{{driver}}}",
        f"SERVER={datasource.server}",
        f"DATABASE={datasource.database}",
        f"UID={datasource.username}",
        f"PWD={{{password}}}",
        "Encrypt=yes",
        "TrustServerCertificate=yes",
    ]
    return ";".join(parts) + ";"


def group_columns(rows: List[Any]) -> Schema:
    """Group INFORMATION_SCHEMA rows by table, keeping row order."""
    schema: Schema = {}
    for table_name, column_name, data_type, is_nullable in rows:
        schema.setdefault(table_name, []).append(
            ColumnInfo(
                name=column_name,
                type=data_type,
                nullable=str(is_nullable).upper() == "YES",
            )
        )
    return schema


class SchemaIntrospector:
    """Reads table/column metadata from a SQL Server data source."""

    def __init__(
        self,
        driver: str = DEFAULT_ODBC_DRIVER,
        login_timeout: int = DEFAULT_LOGIN_TIMEOUT_SECONDS,
    ):
        self.driver = driver
        self.login_timeout = login_timeout

    def _connect(self, datasource: DataSource) -> Any:
        # pyodbc needs the unixODBC runtime; only load it when a schema is requested
        import pyodbc

        return pyodbc.connect(
            build_connection_string(datasource, self.driver),
            timeout=self.login_timeout,
            readonly=True,
        )

    def get_schema(self, datasource: DataSource) -> Schema:
        """
        Read the data source's columns grouped by table.

        Args:
            datasource: Data source with connection details

        Returns:
            Mapping of table name to columns in ordinal order

        Raises:
            SchemaIntrospectionError: If connecting or querying fails
        """
        try:
            connection = self._connect(datasource)
        except Exception as e:
            logger.error(f"Could not connect to datasource {datasource.id}: {e}")
            raise SchemaIntrospectionError("Database connection error") from e

        try:
            cursor = connection.cursor()
            cursor.execute(SCHEMA_COLUMNS_QUERY)
            rows = cursor.fetchall()
        except Exception as e:
            logger.error(f"Schema query failed for datasource {datasource.id}: {e}")
            raise SchemaIntrospectionError("Database connection error") from e
        finally:
            connection.close()

        schema = group_columns(rows)
        logger.info(f"Introspected {len(schema)} tables from datasource {datasource.id}")
        return schema
