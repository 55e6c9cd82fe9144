"""
Card Number + Player Search Strategy

Handles queries such as "108 john smith": a leading card number followed by a
player name. The combined lookup (number AND player) scores highest; when it is
thin, number-only cards and name-only players are appended as fallbacks.
"""

import asyncio
import logging
from typing import Any, Dict, List

from app.models.search import CardResult, DetectedIntent, EntityType, PlayerResult, SearchResult
from ..result_formatter import format_card_result, format_player_result
from .base import SearchStrategy

logger = logging.getLogger(__name__)


class CardNumberPlayerSearchStrategy(SearchStrategy):
    """
    Combined card-number + player-name search with fallback.

    Config keys:
        score: Score for combined matches (default 95)
        combined_share: Fraction of the limit for the combined lookup (default 0.7)
        fallback_enabled: Append fallbacks when combined hits are few (default True)
        fallback_min_results: Threshold below which fallbacks run (default 5)
        fallback_card_share / fallback_card_score: Number-only cards (0.4 / 75)
        fallback_player_share / fallback_player_score: Name-only players (0.3 / 80)
    """

    name = "card_number_player"
    entity_type = EntityType.CARD

    def __init__(self, config: Dict[str, Any], catalog_store):
        super().__init__(config, catalog_store)
        self.score = config.get("score", 95)
        self.combined_share = config.get("combined_share", 0.7)
        self.fallback_enabled = config.get("fallback_enabled", True)
        self.fallback_min_results = config.get("fallback_min_results", 5)
        self.fallback_card_share = config.get("fallback_card_share", 0.4)
        self.fallback_card_score = config.get("fallback_card_score", 75)
        self.fallback_player_share = config.get("fallback_player_share", 0.3)
        self.fallback_player_score = config.get("fallback_player_score", 80)

    def applies_to(self, intent: DetectedIntent) -> bool:
        return intent.card_number_with_player

    async def _retrieve(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        card_number = intent.card_number
        player_name = intent.player_name_remainder.strip()

        combined = await self.store.find_cards_by_number(
            card_number,
            _share(limit, self.combined_share),
            player_name=player_name
        )
        results: List[SearchResult] = [format_card_result(card, self.score) for card in combined]

        if self.fallback_enabled and len(combined) < self.fallback_min_results:
            logger.info(
                f"Only {len(combined)} combined matches for #{card_number} '{player_name}', "
                f"adding fallbacks"
            )
            number_fallback, player_fallback = await asyncio.gather(
                self._number_fallback(card_number, limit),
                self._player_fallback(query, player_name, limit)
            )
            results.extend(number_fallback)
            results.extend(player_fallback)

        return _unique(results)

    async def _number_fallback(self, card_number: str, limit: int) -> List[CardResult]:
        cards = await self.store.find_cards_by_number(card_number, _share(limit, self.fallback_card_share))

        fallback = []
        for card in cards:
            result = format_card_result(card, self.fallback_card_score)
            fallback.append(result.model_copy(update={"title": f"{result.title} (Card #{card_number})"}))
        return fallback

    async def _player_fallback(self, query: str, player_name: str, limit: int) -> List[PlayerResult]:
        players = await self.store.find_players(player_name, _share(limit, self.fallback_player_share))

        fallback = []
        for player in players:
            # Hyphenated first names ("Hyun-Jin Ryu") read as a card number; score as a plain player hit
            if _full_name(player) == query.strip().lower():
                fallback.append(format_player_result(player, query))
                continue
            result = format_player_result(player, player_name, self.fallback_player_score)
            fallback.append(result.model_copy(update={"title": f"{result.title} (Player)"}))
        return fallback


def _share(limit: int, fraction: float) -> int:
    return max(1, int(limit * fraction))


def _full_name(player: Dict[str, Any]) -> str:
    return f"{player.get('first_name') or ''} {player.get('last_name') or ''}".strip().lower()


def _unique(results: List[SearchResult]) -> List[SearchResult]:
    seen = set()
    unique = []
    for result in results:
        if result.key not in seen:
            seen.add(result.key)
            unique.append(result)
    return unique
