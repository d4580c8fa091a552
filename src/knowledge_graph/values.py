"""
Graph value types and the entity classifier.

Query results arrive as records whose fields may hold a node, a relationship,
or anything else. Every field is decoded exactly once into the ``Value``
union defined here, either from neo4j driver objects at the store boundary
(``decode_value``) or from plain JSON-shaped payloads (``classify``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from neo4j.graph import Node, Relationship

from ..utils.constants import MAX_NESTING_DEPTH, TRUNCATED_VALUE
from ..utils.types import Properties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identifier:
    """Canonical identity of a graph entity.

    Graph stores hand out identities as integers or strings depending on the
    driver and serialization path; equality and hashing always go through the
    canonical string form.
    """

    value: str

    @classmethod
    def of(cls, raw: Any) -> Optional["Identifier"]:
        """Normalize a raw identity, returning None when it cannot be one."""
        if isinstance(raw, Identifier):
            return raw
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return cls(str(raw))
        if isinstance(raw, float):
            if raw.is_integer():
                return cls(str(int(raw)))
            return cls(repr(raw))
        if isinstance(raw, str):
            return cls(raw) if raw else None
        if isinstance(raw, (dict, list, tuple, set)):
            return None
        return cls(str(raw))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NodeValue:
    """A vertex returned by a query."""

    identity: Identifier
    labels: Tuple[str, ...] = ()
    properties: Properties = field(default_factory=dict)


@dataclass(frozen=True)
class RelationshipValue:
    """An edge returned by a query."""

    identity: Identifier
    type: str
    start: Identifier
    end: Identifier
    properties: Properties = field(default_factory=dict)


@dataclass(frozen=True)
class ScalarValue:
    """Any field value that is neither a node nor a relationship."""

    raw: Any = None


Value = Union[NodeValue, RelationshipValue, ScalarValue]
QueryRecord = Dict[str, Value]

_START_KEYS = ("start", "startIdentity")
_END_KEYS = ("end", "endIdentity")


def _properties(raw: Any) -> Properties:
    if isinstance(raw, Mapping):
        return dict(raw)
    return {}


def _labels(raw: Any) -> Tuple[str, ...]:
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, (list, tuple)):
        return tuple(str(label) for label in raw if label is not None)
    return ()


def _first_present(payload: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def classify(value: Any) -> Value:
    """Tag one field value as a node, a relationship, or a scalar.

    Priority follows the explorer's structural rules: a mapping with an
    ``identity`` and non-null ``labels`` is a node (even if it also has
    ``type``), otherwise one with ``identity`` and a non-empty ``type`` is a
    relationship, and everything else passes through as a scalar. Never
    raises.

    Args:
        value: Raw field value, or an already-decoded ``Value``.

    Returns:
        The decoded value.
    """
    if isinstance(value, (NodeValue, RelationshipValue, ScalarValue)):
        return value

    if not isinstance(value, Mapping):
        return ScalarValue(value)

    identity = Identifier.of(value.get("identity"))
    if identity is None:
        return ScalarValue(value)

    if value.get("labels") is not None:
        return NodeValue(
            identity=identity,
            labels=_labels(value.get("labels")),
            properties=_properties(value.get("properties")),
        )

    rel_type = value.get("type")
    if rel_type:
        start = Identifier.of(_first_present(value, _START_KEYS))
        end = Identifier.of(_first_present(value, _END_KEYS))
        if start is None or end is None:
            logger.debug(f"Relationship {identity} has no endpoints, dropping")
            return ScalarValue(value)
        return RelationshipValue(
            identity=identity,
            type=str(rel_type),
            start=start,
            end=end,
            properties=_properties(value.get("properties")),
        )

    return ScalarValue(value)


def decode_value(raw: Any) -> Value:
    """Decode a value produced by the neo4j driver.

    Driver ``Node`` and ``Relationship`` objects are converted directly using
    their element ids; the driver exposes labels as a set, so they are sorted
    to keep ``labels[0]`` stable. Anything else goes through ``classify``.
    """
    if isinstance(raw, Node):
        return NodeValue(
            identity=Identifier(raw.element_id),
            labels=tuple(sorted(raw.labels)),
            properties=dict(raw.items()),
        )

    if isinstance(raw, Relationship):
        return RelationshipValue(
            identity=Identifier(raw.element_id),
            type=raw.type,
            start=Identifier(raw.start_node.element_id),
            end=Identifier(raw.end_node.element_id),
            properties=dict(raw.items()),
        )

    return classify(raw)


def to_json_safe(value: Any, _depth: int = 0) -> Any:
    """Convert driver values (graph entities, temporal, bytes) into JSON values.

    Containers nested deeper than ``MAX_NESTING_DEPTH`` are replaced by
    ``TRUNCATED_VALUE``.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (Node, Relationship)):
        return to_plain(decode_value(value))
    if _depth >= MAX_NESTING_DEPTH:
        return TRUNCATED_VALUE
    if isinstance(value, Mapping):
        return {str(key): to_json_safe(item, _depth + 1) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_safe(item, _depth + 1) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    # neo4j.time types
    if hasattr(value, "iso_format"):
        return value.iso_format()
    return str(value)


def to_plain(value: Value) -> Any:
    """Render a decoded value in the explorer's plain-object wire shape."""
    if isinstance(value, NodeValue):
        return {
            "identity": str(value.identity),
            "labels": list(value.labels),
            "properties": to_json_safe(value.properties),
        }

    if isinstance(value, RelationshipValue):
        return {
            "identity": str(value.identity),
            "type": value.type,
            "properties": to_json_safe(value.properties),
            "start": str(value.start),
            "end": str(value.end),
        }

    return to_json_safe(value.raw)
