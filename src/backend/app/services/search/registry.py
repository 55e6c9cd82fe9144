"""
Search Strategy Registry

Dispatch table for universal search: maps a category and detected intent to the
ordered list of strategies that should run.
"""

import logging
from typing import Any, Dict, List, Optional

from app.models.search import DetectedIntent, EntityType, SearchCategory
from .strategies.base import SearchStrategy

logger = logging.getLogger(__name__)


# Fixed dispatch order; results are concatenated in this order before ranking
DISPATCH_ORDER = [
    "card_number_player",
    "card_number",
    "card_type",
    "player",
    "team",
    "series",
]

CATEGORY_ENTITY_TYPES = {
    SearchCategory.ALL: frozenset(EntityType),
    SearchCategory.CARDS: frozenset({EntityType.CARD}),
    SearchCategory.PLAYERS: frozenset({EntityType.PLAYER}),
    SearchCategory.TEAMS: frozenset({EntityType.TEAM}),
    SearchCategory.SERIES: frozenset({EntityType.SERIES}),
}


class SearchStrategyRegistry:
    """
    Registry for search strategies.

    Manages:
    - Strategy registration
    - Configuration-based enable/disable
    - Selection by category and intent, in dispatch order
    """

    def __init__(self, strategies: Optional[List[SearchStrategy]] = None):
        self._strategies: Dict[str, SearchStrategy] = {}
        for strategy in strategies or []:
            self.register(strategy.get_name(), strategy)
        logger.info("SearchStrategyRegistry initialized")

    def register(self, name: str, strategy: SearchStrategy) -> None:
        """
        Register a search strategy.

        Args:
            name: Strategy name (e.g., "card_number", "player")
            strategy: SearchStrategy instance
        """
        if name in self._strategies:
            logger.warning(f"Overwriting existing strategy: {name}")

        self._strategies[name] = strategy
        logger.info(f"Registered strategy '{name}' (enabled: {strategy.is_enabled()})")

    def get(self, name: str) -> Optional[SearchStrategy]:
        return self._strategies.get(name)

    def get_enabled(self) -> List[SearchStrategy]:
        return [s for s in self._ordered() if s.is_enabled()]

    def select(self, category: SearchCategory, intent: DetectedIntent) -> List[SearchStrategy]:
        """
        Strategies to run for one search.

        Keeps enabled strategies whose entity type the category allows and whose
        applies_to(intent) holds, in DISPATCH_ORDER.

        Args:
            category: Requested category filter
            intent: Output of QueryAnalyzer

        Returns:
            Ordered list of SearchStrategy instances
        """
        allowed = CATEGORY_ENTITY_TYPES[SearchCategory(category)]

        selected = [
            strategy for strategy in self.get_enabled()
            if strategy.entity_type in allowed and strategy.applies_to(intent)
        ]
        logger.debug(f"Selected strategies for category '{category}': {[s.get_name() for s in selected]}")
        return selected

    def list_strategy_names(self) -> List[str]:
        return [s.get_name() for s in self._ordered()]

    def get_strategy_info(self) -> Dict[str, Dict[str, Any]]:
        """
        Get detailed information about all registered strategies.

        Returns:
            Dict of {strategy_name: {enabled, entity_type, class_name}}
        """
        return {
            strategy.get_name(): {
                "enabled": strategy.is_enabled(),
                "entity_type": strategy.entity_type.value,
                "class_name": strategy.__class__.__name__
            }
            for strategy in self._ordered()
        }

    def _ordered(self) -> List[SearchStrategy]:
        # Unknown names sort after the known dispatch order, in registration order
        rank = {name: i for i, name in enumerate(DISPATCH_ORDER)}
        names = sorted(self._strategies, key=lambda n: rank.get(n, len(DISPATCH_ORDER)))
        return [self._strategies[n] for n in names]
