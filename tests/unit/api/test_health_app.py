"""Tests for the application lifespan and health endpoint."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from neo4j.exceptions import ServiceUnavailable

from src.api import main_local
from src.api.middleware.auth import create_access_token


def test_health_degraded_without_neo4j():
    with patch.object(
        main_local, "create_neo4j_client", side_effect=ServiceUnavailable("down")
    ):
        with TestClient(main_local.app) as client:
            resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "degraded"
    assert resp.json()["services"]["neo4j"] == "down"


def test_store_routes_unavailable_without_neo4j():
    with patch.object(
        main_local, "create_neo4j_client", side_effect=ServiceUnavailable("down")
    ):
        with TestClient(main_local.app) as client:
            resp = client.post(
                "/api/graph/query",
                json={"query": "MATCH (n) RETURN n"},
                headers={"Authorization": f"Bearer {create_access_token('u1', 'alice')}"},
            )

    assert resp.status_code == 503
    assert resp.json()["message"] == "Graph database not initialized"


def test_health_with_neo4j():
    graph = MagicMock()
    graph.verify_connectivity.return_value = True

    with patch.object(main_local, "create_neo4j_client", return_value=graph):
        with TestClient(main_local.app) as client:
            resp = client.get("/health")
            assert main_local.state.graph is graph

    assert resp.json()["status"] == "healthy"
    assert resp.headers["X-Request-ID"]
    graph.create_constraints.assert_called_once()
    graph.close.assert_called_once()
    assert main_local.state.graph is None
