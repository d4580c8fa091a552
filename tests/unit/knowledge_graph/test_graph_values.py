"""Unit tests for graph value decoding and classification."""

from datetime import date
from unittest.mock import MagicMock

import pytest
from neo4j.graph import Node, Relationship

from src.utils.constants import MAX_NESTING_DEPTH, TRUNCATED_VALUE
from src.knowledge_graph.values import (
    Identifier,
    NodeValue,
    RelationshipValue,
    ScalarValue,
    classify,
    decode_value,
    to_json_safe,
    to_plain,
)


class TestIdentifier:
    def test_integer_and_string_forms_are_equal(self):
        assert Identifier.of(1) == Identifier.of("1")
        assert hash(Identifier.of(42)) == hash(Identifier.of("42"))

    def test_integral_float_normalizes_to_integer_text(self):
        assert Identifier.of(7.0) == Identifier("7")

    def test_non_integral_float_keeps_fraction(self):
        assert Identifier.of(1.5) == Identifier("1.5")

    @pytest.mark.parametrize("raw", [None, "", True, False, {"low": 1}, [1]])
    def test_unusable_raw_values(self, raw):
        assert Identifier.of(raw) is None

    def test_existing_identifier_passes_through(self):
        ident = Identifier("4:abc:1")
        assert Identifier.of(ident) is ident

    def test_str(self):
        assert str(Identifier.of(12)) == "12"


class TestClassify:
    def test_node_like_mapping(self):
        value = classify(
            {"identity": "1", "labels": ["Person"], "properties": {"name": "Alice"}}
        )

        assert isinstance(value, NodeValue)
        assert value.identity == Identifier("1")
        assert value.labels == ("Person",)
        assert value.properties == {"name": "Alice"}

    def test_labels_take_priority_over_type(self):
        value = classify(
            {"identity": 3, "labels": ["Thing"], "type": "KNOWS", "start": 1, "end": 2}
        )
        assert isinstance(value, NodeValue)

    def test_relationship_like_mapping(self):
        value = classify(
            {"identity": "5", "type": "KNOWS", "start": "1", "end": "2", "properties": {}}
        )

        assert isinstance(value, RelationshipValue)
        assert value.identity == Identifier("5")
        assert value.type == "KNOWS"
        assert value.start == Identifier("1")
        assert value.end == Identifier("2")

    def test_relationship_accepts_identity_style_endpoints(self):
        value = classify(
            {"identity": 9, "type": "OWNS", "startIdentity": 1, "endIdentity": 2}
        )

        assert isinstance(value, RelationshipValue)
        assert (value.start, value.end) == (Identifier("1"), Identifier("2"))

    def test_null_labels_do_not_make_a_node(self):
        value = classify(
            {"identity": "6", "labels": None, "type": "K", "start": "1", "end": "2"}
        )

        assert isinstance(value, RelationshipValue)
        assert value.type == "K"

    @pytest.mark.parametrize("rel_type", ["", None])
    def test_empty_type_is_not_a_relationship(self, rel_type):
        value = classify(
            {"identity": "5", "type": rel_type, "start": "1", "end": "2", "properties": {}}
        )

        assert isinstance(value, ScalarValue)

    def test_relationship_without_endpoints_is_scalar(self):
        assert isinstance(classify({"identity": "5", "type": "KNOWS"}), ScalarValue)

    def test_mapping_without_identity_is_scalar(self):
        value = classify({"labels": ["Person"], "properties": {}})
        assert isinstance(value, ScalarValue)

    @pytest.mark.parametrize("raw", [None, 3, "text", [1, 2], {"foo": "bar"}])
    def test_everything_else_is_scalar(self, raw):
        value = classify(raw)

        assert isinstance(value, ScalarValue)
        assert value.raw == raw

    def test_missing_properties_become_empty(self):
        value = classify({"identity": 1, "labels": []})

        assert value.properties == {}
        assert value.labels == ()

    def test_single_label_string(self):
        assert classify({"identity": 1, "labels": "Person"}).labels == ("Person",)

    def test_decoded_value_passes_through(self):
        node = NodeValue(identity=Identifier("1"), labels=("A",))
        assert classify(node) is node


class TestDecodeValue:
    def test_driver_node(self):
        node = MagicMock(spec=Node)
        node.element_id = "4:db:17"
        node.labels = frozenset({"Person", "Employee"})
        node.items.return_value = [("name", "Alice")]

        value = decode_value(node)

        assert value == NodeValue(
            identity=Identifier("4:db:17"),
            labels=("Employee", "Person"),
            properties={"name": "Alice"},
        )

    def test_driver_relationship(self):
        start = MagicMock(element_id="4:db:1")
        end = MagicMock(element_id="4:db:2")
        rel = MagicMock(spec=Relationship)
        rel.element_id = "5:db:9"
        rel.type = "KNOWS"
        rel.start_node = start
        rel.end_node = end
        rel.items.return_value = [("since", 2020)]

        value = decode_value(rel)

        assert isinstance(value, RelationshipValue)
        assert value.identity == Identifier("5:db:9")
        assert value.start == Identifier("4:db:1")
        assert value.end == Identifier("4:db:2")
        assert value.properties == {"since": 2020}

    def test_plain_values_are_classified(self):
        assert decode_value(12) == ScalarValue(12)


class TestToPlain:
    def test_node_shape(self):
        node = NodeValue(identity=Identifier("1"), labels=("Person",), properties={"name": "A"})

        assert to_plain(node) == {
            "identity": "1",
            "labels": ["Person"],
            "properties": {"name": "A"},
        }

    def test_relationship_shape(self):
        rel = RelationshipValue(
            identity=Identifier("5"),
            type="KNOWS",
            start=Identifier("1"),
            end=Identifier("2"),
        )

        assert to_plain(rel) == {
            "identity": "5",
            "type": "KNOWS",
            "properties": {},
            "start": "1",
            "end": "2",
        }

    def test_scalar_is_unwrapped(self):
        assert to_plain(ScalarValue("bar")) == "bar"
        assert to_plain(ScalarValue([1, 2])) == [1, 2]

    def test_driver_entities_inside_lists(self):
        node = MagicMock(spec=Node)
        node.element_id = "4:db:1"
        node.labels = frozenset({"Person"})
        node.items.return_value = [("name", "Alice")]

        assert to_json_safe([node]) == [
            {"identity": "4:db:1", "labels": ["Person"], "properties": {"name": "Alice"}}
        ]

    def test_deep_nesting_is_truncated(self):
        nested = "leaf"
        for _ in range(MAX_NESTING_DEPTH + 10):
            nested = {"a": nested}

        result = to_json_safe(nested)

        for _ in range(MAX_NESTING_DEPTH):
            result = result["a"]
        assert result == TRUNCATED_VALUE

    def test_json_safe_conversions(self):
        assert to_json_safe(b"\x01\xff") == "01ff"
        assert to_json_safe({"when": date(2024, 1, 2)}) == {"when": "2024-01-02"}
        assert to_json_safe((1, "a")) == [1, "a"]
