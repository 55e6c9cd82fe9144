"""
Card Type Search Strategy

Finds cards carrying any requested attribute flag (rookie, autograph, relic,
parallel), narrowed to a player when the query names one ("trout rookie").
"""

import logging
from typing import Any, Dict, List, Optional

from app.models.search import DetectedIntent, EntityType, SearchResult
from ..result_formatter import format_card_result
from .base import SearchStrategy

logger = logging.getLogger(__name__)


class CardTypeSearchStrategy(SearchStrategy):
    """Card attribute search, score 85"""

    name = "card_type"
    entity_type = EntityType.CARD

    def __init__(self, config: Dict[str, Any], catalog_store):
        super().__init__(config, catalog_store)
        self.score = config.get("score", 85)

    def applies_to(self, intent: DetectedIntent) -> bool:
        return bool(intent.card_types)

    async def _retrieve(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        player_name = self.player_filter(intent)
        logger.debug(f"Card types {sorted(t.value for t in intent.card_types)}, player filter: {player_name}")

        cards = await self.store.find_cards_by_type(intent.card_types, limit, player_name=player_name)
        return [format_card_result(card, self.score) for card in cards]

    @staticmethod
    def player_filter(intent: DetectedIntent) -> Optional[str]:
        """Remainder after a card number, else the non-keyword words, else no filter"""
        if intent.player_name_remainder and intent.player_name_remainder.strip():
            return intent.player_name_remainder.strip()
        if intent.name_text and intent.name_text.strip():
            return intent.name_text.strip()
        return None
