"""
Player Search Strategy

Substring match over player names; scored by calculate_player_relevance().
"""

import logging
from typing import List

from app.models.search import DetectedIntent, EntityType, SearchResult
from ..result_formatter import format_player_result
from .base import SearchStrategy

logger = logging.getLogger(__name__)


class PlayerSearchStrategy(SearchStrategy):
    name = "player"
    entity_type = EntityType.PLAYER

    async def _retrieve(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        players = await self.store.find_players(query, limit)
        return [format_player_result(player, query) for player in players]
