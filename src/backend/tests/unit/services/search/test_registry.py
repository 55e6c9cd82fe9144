"""
Unit tests for SearchStrategyRegistry dispatch and StrategyFactory wiring
"""

import pytest

from app.models.search import CardType, DetectedIntent, SearchCategory
from app.services.search.registry import SearchStrategyRegistry
from app.services.search.strategy_factory import StrategyFactory


@pytest.fixture
def registry(search_config, mock_catalog_store):
    strategies = StrategyFactory(search_config, mock_catalog_store).create_all_strategies()
    return SearchStrategyRegistry(strategies)


@pytest.mark.unit
class TestStrategyFactory:

    def test_creates_all_strategies(self, search_config, mock_catalog_store):
        strategies = StrategyFactory(search_config, mock_catalog_store).create_all_strategies()

        assert [s.get_name() for s in strategies] == [
            "card_number_player", "card_number", "card_type", "player", "team", "series"
        ]
        assert all(s.store is mock_catalog_store for s in strategies)

    def test_missing_config_uses_defaults(self, mock_catalog_store):
        strategies = StrategyFactory({}, mock_catalog_store).create_all_strategies()

        assert len(strategies) == 6
        assert all(s.is_enabled() for s in strategies)

    def test_unknown_strategy(self, mock_catalog_store):
        assert StrategyFactory({}, mock_catalog_store).create_strategy("vector", {}) is None


@pytest.mark.unit
class TestRegistrySelect:

    def test_plain_text_all_categories(self, registry):
        selected = registry.select(SearchCategory.ALL, DetectedIntent(name_text="trout"))
        assert [s.get_name() for s in selected] == ["player", "team", "series"]

    def test_card_number_only(self, registry):
        intent = DetectedIntent(card_number="108", name_text="108")
        selected = registry.select(SearchCategory.ALL, intent)
        assert [s.get_name() for s in selected] == ["card_number", "player", "team", "series"]

    def test_card_number_with_player_and_type(self, registry):
        intent = DetectedIntent(
            card_number="108",
            player_name_remainder="trout rookie",
            card_number_with_player=True,
            card_types=frozenset({CardType.ROOKIE}),
        )
        selected = registry.select(SearchCategory.ALL, intent)
        assert [s.get_name() for s in selected] == [
            "card_number_player", "card_type", "player", "team", "series"
        ]

    @pytest.mark.parametrize("category,expected", [
        (SearchCategory.CARDS, ["card_number"]),
        (SearchCategory.PLAYERS, ["player"]),
        (SearchCategory.TEAMS, ["team"]),
        (SearchCategory.SERIES, ["series"]),
    ])
    def test_category_filter(self, registry, category, expected):
        intent = DetectedIntent(card_number="108", name_text="108")
        assert [s.get_name() for s in registry.select(category, intent)] == expected

    def test_category_accepts_plain_string(self, registry):
        selected = registry.select("players", DetectedIntent(name_text="trout"))
        assert [s.get_name() for s in selected] == ["player"]

    def test_cards_category_without_card_signals_selects_nothing(self, registry):
        assert registry.select(SearchCategory.CARDS, DetectedIntent(name_text="trout")) == []

    def test_disabled_strategy_not_selected(self, search_config, mock_catalog_store):
        search_config["strategies"]["team"]["enabled"] = False
        registry = SearchStrategyRegistry(
            StrategyFactory(search_config, mock_catalog_store).create_all_strategies()
        )

        selected = registry.select(SearchCategory.ALL, DetectedIntent(name_text="trout"))

        assert [s.get_name() for s in selected] == ["player", "series"]
        assert registry.get_strategy_info()["team"]["enabled"] is False


@pytest.mark.unit
class TestRegistryIntrospection:

    def test_strategy_names_in_dispatch_order(self, search_config, mock_catalog_store):
        strategies = StrategyFactory(search_config, mock_catalog_store).create_all_strategies()
        registry = SearchStrategyRegistry(list(reversed(strategies)))

        assert registry.list_strategy_names() == [
            "card_number_player", "card_number", "card_type", "player", "team", "series"
        ]

    def test_strategy_info(self, registry):
        info = registry.get_strategy_info()

        assert info["player"] == {
            "enabled": True,
            "entity_type": "player",
            "class_name": "PlayerSearchStrategy",
        }
