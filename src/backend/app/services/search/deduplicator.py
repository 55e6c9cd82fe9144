"""
Result Deduplicator

Removes repeated results across strategies. Two results are the same entity when
they share (type, id); the first occurrence wins and order is otherwise kept.
"""

import logging
from typing import List, Set, Tuple

from app.models.search import SearchResult

logger = logging.getLogger(__name__)


class ResultDeduplicator:
    """Stable first-occurrence dedup keyed by (type, id)"""

    def dedupe(self, results: List[SearchResult]) -> List[SearchResult]:
        seen: Set[Tuple[str, str]] = set()
        unique: List[SearchResult] = []

        for result in results:
            if result.key in seen:
                continue
            seen.add(result.key)
            unique.append(result)

        if len(unique) < len(results):
            logger.debug(f"Removed {len(results) - len(unique)} duplicate results")

        return unique
