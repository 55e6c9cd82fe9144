"""
Strategy Factory

Discovers and initializes retrieval strategies based on search_config.json.

Configuration-Driven Design:
- All strategy settings in search_config.json
- Factory reads config and dynamically imports strategy classes
- Every strategy receives the same injected CatalogStore

Usage:
    from app.services.search.strategy_factory import StrategyFactory

    factory = StrategyFactory(search_config, catalog_store)
    strategies = factory.create_all_strategies()
"""

import logging
from importlib import import_module
from typing import Any, Dict, List, Optional

from .strategies.base import SearchStrategy

logger = logging.getLogger(__name__)


class StrategyFactory:
    """
    Factory for creating search strategies from configuration.

    Strategies missing from the config section are still created with defaults;
    a strategy is switched off only by "enabled": false.
    """

    # Strategy class mapping (strategy_name -> module, ClassName)
    STRATEGY_CLASSES = {
        "card_number_player": (
            "app.services.search.strategies.card_number_player_strategy",
            "CardNumberPlayerSearchStrategy"
        ),
        "card_number": ("app.services.search.strategies.card_number_strategy", "CardNumberSearchStrategy"),
        "card_type": ("app.services.search.strategies.card_type_strategy", "CardTypeSearchStrategy"),
        "player": ("app.services.search.strategies.player_strategy", "PlayerSearchStrategy"),
        "team": ("app.services.search.strategies.team_strategy", "TeamSearchStrategy"),
        "series": ("app.services.search.strategies.series_strategy", "SeriesSearchStrategy"),
    }

    def __init__(self, search_config: Dict[str, Any], catalog_store):
        """
        Initialize strategy factory.

        Args:
            search_config: Full search_config.json dict
            catalog_store: CatalogStore instance shared by all strategies
        """
        self.search_config = search_config
        self.catalog_store = catalog_store
        self.strategies_config = search_config.get("strategies", {})

        logger.info(f"StrategyFactory initialized with {len(self.strategies_config)} strategy configs")

    def create_all_strategies(self) -> List[SearchStrategy]:
        """
        Create every known strategy.

        Returns:
            List of initialized SearchStrategy instances
        """
        strategies = []

        for strategy_name in self.STRATEGY_CLASSES:
            strategy = self.create_strategy(strategy_name, self.strategies_config.get(strategy_name, {}))
            if strategy:
                strategies.append(strategy)

        unknown = sorted(set(self.strategies_config) - set(self.STRATEGY_CLASSES))
        if unknown:
            logger.warning(f"Unknown strategies in config, skipping: {unknown}")

        logger.info(f"StrategyFactory created {len(strategies)} strategies: {[s.get_name() for s in strategies]}")
        return strategies

    def create_strategy(
        self,
        strategy_name: str,
        strategy_config: Dict[str, Any]
    ) -> Optional[SearchStrategy]:
        """
        Create a single strategy instance.

        Args:
            strategy_name: Strategy name (e.g., "card_number", "player")
            strategy_config: Configuration dict from search_config.json

        Returns:
            SearchStrategy instance or None if strategy not found
        """
        if strategy_name not in self.STRATEGY_CLASSES:
            logger.warning(f"Unknown strategy '{strategy_name}' - skipping")
            return None

        module_path, class_name = self.STRATEGY_CLASSES[strategy_name]
        module = import_module(module_path)
        strategy_class = getattr(module, class_name)

        return strategy_class(config=strategy_config, catalog_store=self.catalog_store)
