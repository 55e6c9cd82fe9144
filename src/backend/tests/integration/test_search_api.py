"""
Integration tests for the universal search API

Tests full request/response flow:
- /api/v1/search/universal query validation, response shape, error mapping
- /api/v1/search/health
- Correlation ID propagation
"""

import pytest

from app.services.search.errors import StoreUnavailableError


@pytest.mark.integration
@pytest.mark.api
class TestUniversalSearchEndpoint:

    @pytest.mark.asyncio
    async def test_player_search(self, api_client):
        response = await api_client.get("/api/v1/search/universal", params={"q": "trout"})

        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "trout"
        assert body["totalResults"] == 1
        assert "searchTimeMs" in body

        player = body["results"][0]
        assert player["type"] == "player"
        assert player["id"] == "9007199254740993"
        assert player["relevanceScore"] == 110
        assert player["data"]["player_id"] == "9007199254740993"

    @pytest.mark.asyncio
    async def test_short_query_returns_empty(self, api_client, catalog_store):
        response = await api_client.get("/api/v1/search/universal", params={"q": "t"})

        assert response.status_code == 200
        assert response.json()["results"] == []
        catalog_store.find_players.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_category_filter(self, api_client, catalog_store):
        response = await api_client.get(
            "/api/v1/search/universal", params={"q": "angels", "category": "teams"}
        )

        assert response.status_code == 200
        catalog_store.find_teams.assert_awaited_once()
        catalog_store.find_players.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [
        {"q": "trout", "category": "stadiums"},
        {"q": "trout", "limit": 0},
        {"q": "trout", "limit": 101},
    ])
    async def test_invalid_parameters(self, api_client, params):
        response = await api_client.get("/api/v1/search/universal", params=params)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_store_unavailable_returns_503(self, api_client, catalog_store):
        error = StoreUnavailableError("connection refused")
        catalog_store.find_players.side_effect = error
        catalog_store.find_teams.side_effect = error
        catalog_store.find_series.side_effect = error

        response = await api_client.get("/api/v1/search/universal", params={"q": "trout"})

        assert response.status_code == 503
        assert response.json() == {
            "error": "Search temporarily unavailable",
            "query": "trout",
            "results": [],
            "totalResults": 0,
        }

    @pytest.mark.asyncio
    async def test_correlation_id_echoed(self, api_client):
        response = await api_client.get(
            "/api/v1/search/universal",
            params={"q": "trout"},
            headers={"X-Correlation-ID": "test-correlation-1"}
        )

        assert response.headers["X-Correlation-ID"] == "test-correlation-1"


@pytest.mark.integration
@pytest.mark.api
class TestSearchHealthEndpoint:

    @pytest.mark.asyncio
    async def test_healthy(self, api_client):
        response = await api_client.get("/api/v1/search/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["route"] == "universal-search"
        assert body["databaseAvailable"] is True
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_degraded_when_store_down(self, api_client, catalog_store):
        catalog_store.ping.return_value = False

        body = (await api_client.get("/api/v1/search/health")).json()

        assert body["status"] == "degraded"
        assert body["databaseAvailable"] is False
