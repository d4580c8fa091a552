"""Unit tests for the explorer query service."""

from unittest.mock import MagicMock

import pytest

from src.knowledge_graph.neo4j_client import QueryResult
from src.knowledge_graph.values import (
    Identifier,
    NodeValue,
    RelationshipValue,
    ScalarValue,
)
from src.services.query_service import GraphQueryService
from src.utils.exceptions import GraphDatabaseError, ValidationError

SUMMARY = {"query_type": "r"}


@pytest.fixture
def client():
    graph = MagicMock()
    graph.run_cypher.return_value = QueryResult(
        records=[
            {
                "a": NodeValue(Identifier("1"), ("Person",), {"name": "Ann"}),
                "r": RelationshipValue(Identifier("9"), "KNOWS", Identifier("1"), Identifier("2")),
                "b": NodeValue(Identifier("2"), ("Person",), {"name": "Bob"}),
                "n": ScalarValue(2),
            }
        ],
        summary=SUMMARY,
    )
    return graph


def test_execute_returns_plain_records(client):
    service = GraphQueryService(client, timeout=12.0)

    result = service.execute("MATCH (a)-[r]->(b) RETURN a, r, b, 2 AS n")

    record = result["data"][0]
    assert list(record) == ["a", "r", "b", "n"]
    assert record["a"] == {"identity": "1", "labels": ["Person"], "properties": {"name": "Ann"}}
    assert record["r"]["start"] == "1"
    assert record["n"] == 2
    assert result["summary"] == SUMMARY
    client.run_cypher.assert_called_once_with(
        "MATCH (a)-[r]->(b) RETURN a, r, b, 2 AS n", timeout=12.0
    )


def test_explore_projects_graph(client):
    result = GraphQueryService(client).explore("MATCH (a)-[r]->(b) RETURN a, r, b")

    assert [node["label"] for node in result["nodes"]] == ["Ann", "Bob"]
    assert result["edges"][0]["from"] == "1"
    assert result["edges"][0]["to"] == "2"
    assert result["summary"] == SUMMARY


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_rejected(client, query):
    with pytest.raises(ValidationError):
        GraphQueryService(client).execute(query)

    client.run_cypher.assert_not_called()


def test_store_errors_propagate(client):
    client.run_cypher.side_effect = GraphDatabaseError("Invalid input 'MATC'")

    with pytest.raises(GraphDatabaseError, match="Invalid input"):
        GraphQueryService(client).explore("MATC (n) RETURN n")
