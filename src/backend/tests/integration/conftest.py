"""
Integration test fixtures

The FastAPI app runs in-process through httpx's ASGITransport. The real search
core is wired exactly as in main.py; only the CatalogStore is replaced.
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.database.catalog_store import CatalogStore


@pytest.fixture
def catalog_store():
    """CatalogStore stand-in with a small catalog"""
    store = AsyncMock(spec=CatalogStore)
    store.find_cards_by_number.return_value = []
    store.find_cards_by_type.return_value = []
    store.find_players.return_value = [
        {
            "player_id": 9007199254740993,
            "first_name": "Mike",
            "last_name": "Trout",
            "nick_name": None,
            "slug": "mike-trout",
            "card_count": 1500,
            "is_hof": False,
            "teams": [],
        }
    ]
    store.find_teams.return_value = []
    store.find_series.return_value = []
    store.ping.return_value = True
    return store


@pytest_asyncio.fixture
async def api_client(catalog_store, mock_config_service):
    """
    HTTP client for API integration testing

    Usage:
        async def test_health_endpoint(api_client):
            response = await api_client.get("/health")
            assert response.status_code == 200
    """
    from app.api.v1.search import get_catalog_store, get_search_orchestrator
    from app.main import app, build_search_orchestrator

    orchestrator = build_search_orchestrator(catalog_store, mock_config_service)
    original_overrides = dict(app.dependency_overrides)
    app.dependency_overrides[get_search_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_catalog_store] = lambda: catalog_store

    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        app.dependency_overrides.update(original_overrides)
