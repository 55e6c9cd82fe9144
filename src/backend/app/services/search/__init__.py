"""
Search Package

Universal search across cards, players, teams and series:
- One retrieval strategy per entity type or query shape
- SearchStrategyRegistry selects strategies by category and detected intent
- SearchOrchestrator fans out, deduplicates and ranks the merged results
"""

from .strategies.base import SearchStrategy
from .deduplicator import ResultDeduplicator
from .errors import SearchError, SearchUnavailableError, StoreUnavailableError
from .orchestrator import SearchOrchestrator
from .registry import SearchStrategyRegistry
from .strategy_factory import StrategyFactory

__all__ = [
    "SearchStrategy",
    "ResultDeduplicator",
    "SearchError",
    "SearchUnavailableError",
    "StoreUnavailableError",
    "SearchOrchestrator",
    "SearchStrategyRegistry",
    "StrategyFactory",
]
