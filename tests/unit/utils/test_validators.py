"""Tests for field validation and the error hierarchy."""

import logging

import pytest

from src.utils.exceptions import (
    GraphDatabaseError,
    GraphMapperError,
    SchemaIntrospectionError,
    StoreError,
    ValidationError,
)
from src.utils.logging_config import RequestIDFilter, request_id_var
from src.utils.validators import is_blank, require_fields


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n", 5, ["x"]])
def test_blank_values(value):
    assert is_blank(value)


def test_non_blank_value():
    assert not is_blank(" x ")


def test_require_fields_passes():
    require_fields({"a": "1", "b": "2"})


def test_require_fields_lists_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        require_fields({"a": "", "b": "ok", "c": None}, entity="mapping")

    assert exc_info.value.fields == ["a", "c"]
    assert str(exc_info.value) == "Missing required mapping fields: a, c"


def test_store_errors_share_a_base():
    assert issubclass(GraphDatabaseError, StoreError)
    assert issubclass(SchemaIntrospectionError, StoreError)
    assert issubclass(StoreError, GraphMapperError)
    assert issubclass(ValidationError, GraphMapperError)


def test_request_id_filter_uses_current_request():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    token = request_id_var.set("abc123")
    try:
        assert RequestIDFilter().filter(record)
    finally:
        request_id_var.reset(token)

    assert record.request_id == "abc123"


def test_request_id_filter_default():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    RequestIDFilter().filter(record)

    assert record.request_id == "-"
