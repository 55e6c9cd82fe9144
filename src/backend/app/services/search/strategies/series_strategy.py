"""
Series Search Strategy

Substring match over series, set and manufacturer names. Every hit scores 75.
"""

from typing import List

from app.models.search import DetectedIntent, EntityType, SearchResult
from ..result_formatter import format_series_result
from .base import SearchStrategy


class SeriesSearchStrategy(SearchStrategy):
    name = "series"
    entity_type = EntityType.SERIES

    async def _retrieve(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        series = await self.store.find_series(query, limit)
        return [format_series_result(record) for record in series]
