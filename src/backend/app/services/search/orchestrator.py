"""
Search Orchestrator

Coordinates one universal search request:
- Rejects queries that are too short without touching the store
- Analyzes the query and selects strategies through the registry
- Executes the selected strategies concurrently under one deadline
- Merges, deduplicates, ranks and truncates their results
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional, Union

from app.models.search import DetectedIntent, SearchCategory, SearchQuery, SearchResponse, SearchResult
from app.services.intent.query_analyzer import QueryAnalyzer
from app.services.ranker.relevance_ranker import RelevanceRanker
from .deduplicator import ResultDeduplicator
from .errors import SearchUnavailableError, StoreUnavailableError
from .registry import CATEGORY_ENTITY_TYPES, SearchStrategyRegistry
from .strategies.base import SearchStrategy

logger = logging.getLogger(__name__)


def _consume_outcome(task: asyncio.Task) -> None:
    """Retrieve the outcome of an abandoned task so its error is not reported as unretrieved"""
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"Abandoned strategy task ended with: {task.exception()}")


class SearchOrchestrator:
    """
    Orchestrates execution of the universal search strategies.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(
        self,
        registry: SearchStrategyRegistry,
        analyzer: QueryAnalyzer,
        deduplicator: ResultDeduplicator,
        ranker: RelevanceRanker,
        config: Dict[str, Any],
        limits_config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize search orchestrator.

        Args:
            registry: Dispatch table of strategies
            analyzer: QueryAnalyzer producing DetectedIntent
            deduplicator: ResultDeduplicator instance
            ranker: RelevanceRanker instance
            config: "orchestration" section of search_config.json
                Example:
                {
                    "timeout_seconds": 10,
                    "min_query_length": 2,
                    "default_limit": 50,
                    "max_limit": 100
                }
            limits_config: "limits" section (headroom_multiplier, headroom_cap)
        """
        limits_config = limits_config or {}

        self.registry = registry
        self.analyzer = analyzer
        self.deduplicator = deduplicator
        self.ranker = ranker
        self.config = config
        self.timeout = config.get("timeout_seconds", 10)
        self.min_query_length = config.get("min_query_length", 2)
        self.default_limit = config.get("default_limit", 50)
        self.max_limit = config.get("max_limit", 100)
        self.headroom_multiplier = limits_config.get("headroom_multiplier", 2)
        self.headroom_cap = limits_config.get("headroom_cap", 30)

        logger.info(
            f"SearchOrchestrator initialized with strategies {registry.list_strategy_names()} "
            f"({len(registry.get_enabled())} enabled, timeout: {self.timeout}s)"
        )

    def strategy_limit(self, limit: int) -> int:
        """Per-strategy fetch size: headroom over the final limit, capped"""
        return min(self.headroom_multiplier * limit, self.headroom_cap)

    async def execute(self, request: SearchQuery) -> SearchResponse:
        """Execute a validated SearchQuery"""
        return await self.search(request.text, limit=request.limit, category=request.category)

    async def search(
        self,
        query: str,
        limit: Optional[int] = None,
        category: Union[SearchCategory, str] = SearchCategory.ALL
    ) -> SearchResponse:
        """
        Execute a universal search.

        Args:
            query: Raw query text
            limit: Maximum results to return (default from config)
            category: Category filter

        Returns:
            SearchResponse with ranked results

        Raises:
            SearchUnavailableError: No strategy completed because the store was unreachable
        """
        start_time = time.perf_counter()
        trimmed = (query or "").strip()
        if limit is None:
            limit = self.default_limit
        limit = min(limit, self.max_limit)

        if len(trimmed) < self.min_query_length or limit < 1:
            logger.info(f"Query '{trimmed}' too short or limit {limit} < 1, returning empty response")
            return SearchResponse.empty(trimmed)

        category = SearchCategory(category)
        intent = self.analyzer.analyze(trimmed)
        strategies = self.registry.select(category, intent)

        logger.info(
            f"SearchOrchestrator executing '{trimmed}' (category={category.value}, limit={limit}) "
            f"with {[s.get_name() for s in strategies]}"
        )

        outputs = await self._execute_parallel(strategies, trimmed, intent, self.strategy_limit(limit))

        # Fallbacks may yield other entity types than the strategy's own
        allowed = CATEGORY_ENTITY_TYPES[category]
        merged = [result for output in outputs for result in output if result.entity_type in allowed]
        ranked = self.ranker.rank(self.deduplicator.dedupe(merged), trimmed)
        results = ranked[:limit]

        search_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.info(
            f"SearchOrchestrator completed: {len(results)} results "
            f"({len(merged)} before dedup) in {search_time_ms:.2f}ms"
        )

        return SearchResponse(
            query=trimmed,
            results=results,
            total_results=len(results),
            search_time_ms=search_time_ms
        )

    async def _execute_parallel(
        self,
        strategies: List[SearchStrategy],
        query: str,
        intent: DetectedIntent,
        strategy_limit: int
    ) -> List[List[SearchResult]]:
        """
        Run strategies concurrently; return their outputs in dispatch order.

        Strategies still running at the deadline are cancelled and contribute nothing.
        """
        if not strategies:
            return []

        tasks = [
            asyncio.create_task(strategy.search(query, intent, strategy_limit))
            for strategy in strategies
        ]

        try:
            _, pending = await asyncio.wait(tasks, timeout=self.timeout)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        # Cancelled tasks finish in the background; the response does not wait on their cleanup
        for task in pending:
            task.add_done_callback(_consume_outcome)
            task.cancel()

        outputs: List[List[SearchResult]] = []
        completed = 0
        unavailable = 0

        for strategy, task in zip(strategies, tasks):
            if task in pending:
                logger.warning(f"Strategy {strategy.get_name()} timed out after {self.timeout}s")
                outputs.append([])
                continue

            error = task.exception()
            if error is None:
                completed += 1
                outputs.append(task.result())
            elif isinstance(error, StoreUnavailableError):
                unavailable += 1
                logger.error(f"Strategy {strategy.get_name()} failed, store unavailable: {error}")
                outputs.append([])
            else:
                logger.error(f"Strategy {strategy.get_name()} failed: {error}", exc_info=error)
                outputs.append([])

        if completed == 0 and unavailable > 0:
            raise SearchUnavailableError(query)

        return outputs
