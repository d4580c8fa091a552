"""Unit tests for SQL Server schema introspection."""

from unittest.mock import MagicMock, patch

import pytest

from src.services.schema_service import (
    ColumnInfo,
    SchemaIntrospector,
    build_connection_string,
    group_columns,
)
from src.storage.datasource_store import DataSource
from src.utils.exceptions import SchemaIntrospectionError, StoreError

DATASOURCE = DataSource(
    id="d1",
    name="Sales",
    server="sql01,1433",
    database="SalesDb",
    username="reader",
    password="p;w}d",
)


def test_group_columns_keeps_order():
    rows = [
        ("Customers", "Id", "int", "NO"),
        ("Customers", "Email", "nvarchar", "YES"),
        ("Orders", "Id", "int", "NO"),
    ]

    schema = group_columns(rows)

    assert list(schema) == ["Customers", "Orders"]
    assert schema["Customers"] == [
        ColumnInfo(name="Id", type="int", nullable=False),
        ColumnInfo(name="Email", type="nvarchar", nullable=True),
    ]


def test_connection_string_escapes_password():
    conn_str = build_connection_string(DATASOURCE, driver="ODBC Driver 18 for SQL Server")

    assert "DRIVER={ODBC Driver 18 for SQL Server};" in conn_str
    assert "SERVER=sql01,1433;" in conn_str
    assert "PWD={p;w}}d};" in conn_str
    assert "Encrypt=yes;" in conn_str


class TestSchemaIntrospector:
    def _introspector(self, connection):
        introspector = SchemaIntrospector()
        patcher = patch.object(introspector, "_connect", return_value=connection)
        patcher.start()
        return introspector, patcher

    def test_get_schema(self):
        connection = MagicMock()
        connection.cursor.return_value.fetchall.return_value = [
            ("Customers", "Id", "int", "NO"),
        ]
        introspector, patcher = self._introspector(connection)

        try:
            schema = introspector.get_schema(DATASOURCE)
        finally:
            patcher.stop()

        assert schema == {"Customers": [ColumnInfo("Id", "int", False)]}
        connection.close.assert_called_once()

    def test_connection_closed_when_query_fails(self):
        connection = MagicMock()
        connection.cursor.return_value.execute.side_effect = RuntimeError("timeout")
        introspector, patcher = self._introspector(connection)

        try:
            with pytest.raises(SchemaIntrospectionError):
                introspector.get_schema(DATASOURCE)
        finally:
            patcher.stop()

        connection.close.assert_called_once()

    def test_connect_failure(self):
        introspector = SchemaIntrospector()

        with patch.object(introspector, "_connect", side_effect=OSError("no route")):
            with pytest.raises(StoreError) as exc_info:
                introspector.get_schema(DATASOURCE)

        assert str(exc_info.value) == "Database connection error"
