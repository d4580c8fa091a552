"""Tests for the explorer endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_query_service
from src.api.middleware import setup_error_handlers
from src.api.middleware.auth import create_access_token
from src.api.routers import graph
from src.knowledge_graph.neo4j_client import QueryResult
from src.knowledge_graph.values import Identifier, NodeValue, RelationshipValue, ScalarValue
from src.services.query_service import GraphQueryService
from src.utils.exceptions import GraphDatabaseError

HEADERS = {"Authorization": f"Bearer {create_access_token('u1', 'alice')}"}

graph_client = MagicMock()

app = FastAPI()
setup_error_handlers(app)
app.include_router(graph.router)
app.dependency_overrides[get_query_service] = lambda: GraphQueryService(graph_client)

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_client():
    graph_client.reset_mock(return_value=True, side_effect=True)
    graph_client.run_cypher.return_value = QueryResult(
        records=[
            {
                "n": NodeValue(Identifier("1"), ("Person",), {"name": "Alice"}),
                "r": RelationshipValue(Identifier("5"), "KNOWS", Identifier("1"), Identifier("2")),
                "m": NodeValue(Identifier("2"), ("Person",), {"name": "Bob"}),
            },
            {
                "n": NodeValue(Identifier("1"), ("Person",), {"name": "AliceDup"}),
                "r": RelationshipValue(Identifier("5"), "KNOWS", Identifier("1"), Identifier("2")),
                "m": ScalarValue("x"),
            },
        ],
        summary={"query_type": "r"},
    )


def test_cypher_returns_plain_records():
    resp = client.post("/api/cypher", json={"query": "MATCH (n)-[r]->(m) RETURN n, r, m"}, headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 2
    assert body["data"][0]["n"]["labels"] == ["Person"]
    assert body["data"][1]["m"] == "x"
    assert body["summary"]["query_type"] == "r"


def test_cypher_uses_default_query():
    client.post("/api/cypher", json={}, headers=HEADERS)

    query = graph_client.run_cypher.call_args[0][0]
    assert query.startswith("MATCH")


def test_graph_query_projects_nodes_and_edges():
    resp = client.post("/api/graph/query", json={"query": "MATCH (n) RETURN n"}, headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert [n["label"] for n in body["nodes"]] == ["Alice", "Bob"]
    assert len(body["edges"]) == 2
    assert body["edges"][0]["from"] == "1"
    assert body["edges"][0]["to"] == "2"


def test_query_error_is_reported():
    graph_client.run_cypher.side_effect = GraphDatabaseError("Invalid input 'MATC'")

    resp = client.post("/api/cypher", json={"query": "MATC (n)"}, headers=HEADERS)

    assert resp.status_code == 500
    assert resp.json()["error"] == "store_error"
    assert "error_id" in resp.json()["details"]


def test_blank_query_rejected():
    resp = client.post("/api/cypher", json={"query": "  "}, headers=HEADERS)

    assert resp.status_code == 400
    graph_client.run_cypher.assert_not_called()


def test_project_records_payload():
    payload = {
        "data": [
            {"n": {"identity": "1", "labels": ["Person"], "properties": {"name": "Alice"}}},
            {"n": {"identity": 1, "labels": ["Person"], "properties": {"name": "AliceDup"}}},
            {"r": {"identity": "5", "type": "KNOWS", "start": "1", "end": "2", "properties": {}}},
            {"foo": "bar"},
            "not-a-record",
        ]
    }

    resp = client.post("/api/graph/project", json=payload, headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert [n["label"] for n in body["nodes"]] == ["Alice"]
    assert body["edges"] == [
        {"id": "5", "from": "1", "to": "2", "label": "KNOWS", "title": "{}"}
    ]


def test_explorer_requires_authentication():
    assert client.post("/api/graph/query", json={}).status_code == 401
