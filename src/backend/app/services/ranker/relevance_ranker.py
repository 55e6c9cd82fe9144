"""
Relevance Ranker
----------------
Deterministic ordering for merged universal search results.

1) Higher relevance score first
2) On equal scores, entity type priority: card > player > team > series
3) Otherwise the incoming (dispatch) order is kept, since sorted() is stable
"""

from __future__ import annotations
from typing import List, Optional

from app.models.search import SearchResult


class RelevanceRanker:
    def _key(self, result: SearchResult) -> tuple:
        # lower tuple sorts earlier; negate to get descending order
        return (-result.relevance_score, -result.entity_type.priority)

    def rank(self, results: List[SearchResult], query: Optional[str] = None) -> List[SearchResult]:
        return sorted(results, key=self._key)
