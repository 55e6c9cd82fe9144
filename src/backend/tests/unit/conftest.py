"""
Unit test fixtures

Fixtures for unit tests that mock external dependencies.
Unit tests should be fast (< 100ms) and isolated.
"""

from unittest.mock import AsyncMock

import pytest

from app.database.catalog_store import CatalogStore
from app.models.search import CardType, DetectedIntent


@pytest.fixture
def mock_catalog_store():
    """Mock CatalogStore; every lookup returns no rows unless a test says otherwise"""
    store = AsyncMock(spec=CatalogStore)
    store.find_cards_by_number.return_value = []
    store.find_cards_by_type.return_value = []
    store.find_players.return_value = []
    store.find_teams.return_value = []
    store.find_series.return_value = []
    store.ping.return_value = True
    return store


@pytest.fixture
def make_card():
    """Factory for card records as returned by CatalogStore"""

    def _make(card_id=1, card_number="108", first_name="Mike", last_name="Trout", **overrides):
        card = {
            "card_id": card_id,
            "card_number": card_number,
            "is_rookie": False,
            "is_autograph": False,
            "is_relic": False,
            "print_run": None,
            "series_name": "2011 Topps Update",
            "series_slug": "2011-topps-update",
            "parallel_of_series": None,
            "set_name": "2011 Topps",
            "set_slug": "2011-topps",
            "set_year": 2011,
            "manufacturer_name": "Topps",
            "color_name": None,
            "color_hex": None,
            "players": [
                {"player_id": 10, "first_name": first_name, "last_name": last_name, "slug": "mike-trout"}
            ],
            "teams": [
                {
                    "team_id": 20,
                    "name": "Los Angeles Angels",
                    "abbreviation": "LAA",
                    "primary_color": "#BA0021",
                    "secondary_color": "#003263",
                    "slug": "los-angeles-angels",
                }
            ],
        }
        card.update(overrides)
        return card

    return _make


@pytest.fixture
def make_player():
    """Factory for player records as returned by CatalogStore"""

    def _make(player_id=10, first_name="Mike", last_name="Trout", nick_name=None, **overrides):
        player = {
            "player_id": player_id,
            "first_name": first_name,
            "last_name": last_name,
            "nick_name": nick_name,
            "slug": f"{first_name}-{last_name}".lower(),
            "card_count": 500,
            "is_hof": False,
            "teams": [],
        }
        player.update(overrides)
        return player

    return _make


@pytest.fixture
def sample_team():
    """Team record as returned by CatalogStore"""
    return {
        "team_id": 20,
        "name": "Los Angeles Angels",
        "slug": "los-angeles-angels",
        "city": "Los Angeles",
        "mascot": "Angels",
        "abbreviation": "LAA",
        "primary_color": "#BA0021",
        "secondary_color": "#003263",
        "organization_name": "MLB",
        "card_count": 1200,
        "player_count": 85,
    }


@pytest.fixture
def sample_series():
    """Series record as returned by CatalogStore"""
    return {
        "series_id": 30,
        "series_name": "2011 Topps Update Gold",
        "series_slug": "2011-topps-update-gold",
        "card_count": 330,
        "rookie_count": 40,
        "is_base": False,
        "parallel_of_series": 29,
        "print_run_display": "/2011",
        "parallel_parent_name": "2011 Topps Update",
        "set_name": "2011 Topps",
        "set_slug": "2011-topps",
        "set_year": 2011,
        "manufacturer_name": "Topps",
        "color_name": "Gold",
        "color_hex": "#FFD700",
    }


@pytest.fixture
def empty_intent():
    return DetectedIntent()


@pytest.fixture
def rookie_intent():
    return DetectedIntent(card_types=frozenset({CardType.ROOKIE}), name_text="trout")
