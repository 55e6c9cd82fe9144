"""
Card Number Search Strategy

Looks up cards whose number contains the detected card-number token.
Used when the query is a bare card number ("108", "RC-1").
"""

import logging
from typing import Any, Dict, List

from app.models.search import DetectedIntent, EntityType, SearchResult
from ..result_formatter import format_card_result
from .base import SearchStrategy

logger = logging.getLogger(__name__)


class CardNumberSearchStrategy(SearchStrategy):
    """
    Card-number-only search.

    Scores 100 when the stored number equals the query token exactly
    (case-insensitive), 80 when it merely contains it ("1089" for "108").
    """

    name = "card_number"
    entity_type = EntityType.CARD

    def __init__(self, config: Dict[str, Any], catalog_store):
        super().__init__(config, catalog_store)
        self.exact_score = config.get("exact_score", 100)
        self.partial_score = config.get("partial_score", 80)

    def applies_to(self, intent: DetectedIntent) -> bool:
        return bool(intent.card_number) and not intent.card_number_with_player

    async def _retrieve(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        card_number = intent.card_number
        cards = await self.store.find_cards_by_number(card_number, limit)

        return [
            format_card_result(card, self.score_card_number(card.get("card_number"), card_number))
            for card in cards
        ]

    def score_card_number(self, stored_number: str, card_number: str) -> int:
        if stored_number is not None and stored_number.lower() == card_number.lower():
            return self.exact_score
        return self.partial_score
