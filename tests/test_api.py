"""Tests for the GraphQL proxy endpoint"""
import json
from typing import Any, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from api.graphql import app
from storefront.routers.graphql import get_upstream_client

SHOP = "test-shop.myshopify.com"
TOKEN = "shpat-secret-storefront-token"


@pytest.fixture
def upstream():
    """Recorded upstream calls plus a swappable handler"""
    state: Dict[str, Any] = {
        "calls": [],
        "handler": lambda request: httpx.Response(200, json={"data": {"shop": {"name": "Test"}}}),
    }

    def dispatch(request: httpx.Request) -> httpx.Response:
        state["calls"].append(request)
        return state["handler"](request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(dispatch))
    app.dependency_overrides[get_upstream_client] = lambda: http_client
    yield state
    app.dependency_overrides.pop(get_upstream_client, None)


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("SHOPIFY_SHOP", SHOP)
    monkeypatch.setenv("SHOPIFY_STOREFRONT_TOKEN", TOKEN)
    monkeypatch.delenv("SHOPIFY_API_VERSION", raising=False)


@pytest.fixture
def client():
    """Test client"""
    return TestClient(app)


def test_health_check(client):
    """Test health check endpoint"""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestGraphQLProxy:
    """POST /api/graphql"""

    def test_forwards_query_with_token(self, client, upstream, configured):
        response = client.post(
            "/api/graphql",
            json={"query": "{ shop { name } }", "variables": {"first": 3}},
        )

        assert response.status_code == 200
        assert response.json() == {"data": {"shop": {"name": "Test"}}}

        sent: httpx.Request = upstream["calls"][0]
        assert str(sent.url) == f"https://{SHOP}/api/2023-07/graphql.json"
        assert sent.method == "POST"
        assert sent.headers["X-Shopify-Storefront-Access-Token"] == TOKEN
        assert sent.headers["Content-Type"] == "application/json"
        assert json.loads(sent.content) == {"query": "{ shop { name } }", "variables": {"first": 3}}

    def test_missing_variables_sent_as_empty_object(self, client, upstream, configured):
        client.post("/api/graphql", json={"query": "{ shop { name } }"})

        assert json.loads(upstream["calls"][0].content)["variables"] == {}

    def test_api_version_from_environment(self, client, upstream, configured, monkeypatch):
        monkeypatch.setenv("SHOPIFY_API_VERSION", "2024-01")

        client.post("/api/graphql", json={"query": "{ shop { name } }"})

        assert str(upstream["calls"][0].url) == f"https://{SHOP}/api/2024-01/graphql.json"

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    def test_other_methods_rejected(self, client, upstream, configured, method):
        response = client.request(method, "/api/graphql")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert upstream["calls"] == []

    @pytest.mark.parametrize("missing", ["SHOPIFY_SHOP", "SHOPIFY_STOREFRONT_TOKEN"])
    def test_missing_credentials(self, client, upstream, configured, monkeypatch, missing):
        monkeypatch.delenv(missing)

        response = client.post("/api/graphql", json={"query": "{ shop { name } }"})

        assert response.status_code == 500
        assert response.json() == {"error": "Server configuration error"}
        assert upstream["calls"] == []

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"query": ""},
            {"variables": {"first": 1}},
            ["query"],
        ],
    )
    def test_missing_query(self, client, upstream, configured, body):
        response = client.post("/api/graphql", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing query in request body"}
        assert upstream["calls"] == []

    def test_invalid_json_body(self, client, upstream, configured):
        response = client.post(
            "/api/graphql",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert upstream["calls"] == []

    def test_upstream_errors_mirrored(self, client, upstream, configured):
        errors = {"errors": [{"message": "Field 'nope' doesn't exist on type 'QueryRoot'"}]}
        upstream["handler"] = lambda request: httpx.Response(200, json=errors)

        response = client.post("/api/graphql", json={"query": "{ nope }"})

        assert response.status_code == 200
        assert response.json() == errors

    def test_upstream_status_mirrored(self, client, upstream, configured):
        upstream["handler"] = lambda request: httpx.Response(
            401, json={"errors": "[API] Invalid API key or access token"}
        )

        response = client.post("/api/graphql", json={"query": "{ shop { name } }"})

        assert response.status_code == 401
        assert response.json()["errors"].startswith("[API]")

    def test_upstream_unreachable(self, client, upstream, configured):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        upstream["handler"] = handler

        response = client.post("/api/graphql", json={"query": "{ shop { name } }"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch from Shopify"}
        assert TOKEN not in response.text

    def test_upstream_non_json(self, client, upstream, configured):
        upstream["handler"] = lambda request: httpx.Response(502, text="<html>Bad gateway</html>")

        response = client.post("/api/graphql", json={"query": "{ shop { name } }"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch from Shopify"}

    def test_token_never_in_responses(self, client, upstream, configured):
        responses: List[httpx.Response] = [
            client.post("/api/graphql", json={"query": "{ shop { name } }"}),
            client.post("/api/graphql", json={}),
            client.get("/api/graphql"),
        ]

        for response in responses:
            assert TOKEN not in response.text
            assert TOKEN not in str(response.headers)


def test_settings_repr_masks_token(configured):
    from storefront.config import GatewaySettings

    settings = GatewaySettings.from_env()

    assert settings.is_configured
    assert TOKEN not in repr(settings)
