"""
Base Search Strategy Interface

Defines the abstract interface for all universal search retrieval strategies.
Each strategy is specialised for one entity type or query shape and reads from
the injected CatalogStore.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

from app.models.search import DetectedIntent, EntityType, SearchResult
from app.services.search.errors import StoreUnavailableError

if TYPE_CHECKING:
    from app.database.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class SearchStrategy(ABC):
    """
    Abstract base class for all retrieval strategies.

    search() is the strategy boundary: store errors raised by _retrieve() are
    logged and turn into an empty result list, so one failing entity type never
    aborts the whole search. StoreUnavailableError is the exception: it
    propagates so the orchestrator can tell "store down" from "strategy broke".
    """

    name: str = "base"
    entity_type: EntityType

    def __init__(self, config: Dict[str, Any], catalog_store: "CatalogStore"):
        """
        Initialize strategy with configuration.

        Args:
            config: Strategy-specific configuration from search_config.json
            catalog_store: Read-only catalog lookups
        """
        self.config = config
        self.store = catalog_store
        self.enabled = config.get("enabled", True)

    def applies_to(self, intent: DetectedIntent) -> bool:
        """
        Whether this strategy should run for the detected intent.

        Entity strategies (player, team, series) always apply; card strategies
        override this to select on card number / card type signals.
        """
        return True

    async def search(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        """
        Execute retrieval with failure isolation.

        Args:
            query: Trimmed raw query text
            intent: Output of QueryAnalyzer
            limit: Strategy-local result cap

        Returns:
            Up to `limit` SearchResults with provisional relevance scores
        """
        try:
            results = await self._retrieve(query, intent, limit)
            logger.info(f"{self.__class__.__name__} found {len(results)} results for '{query}'")
            return results[:limit]

        except StoreUnavailableError:
            raise

        except Exception as e:
            logger.error(f"{self.__class__.__name__} error for '{query}': {e}", exc_info=True)
            return []

    @abstractmethod
    async def _retrieve(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        """Strategy-specific store lookup and result formatting"""

    def is_enabled(self) -> bool:
        """
        Check if this strategy is enabled in configuration.

        Returns:
            True if enabled, False otherwise
        """
        return self.enabled

    def get_name(self) -> str:
        """
        Get the name of this strategy.

        Returns:
            Strategy name (e.g., "card_number", "player")
        """
        return self.name
