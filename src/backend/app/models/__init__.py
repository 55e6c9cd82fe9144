"""Models package - universal search value objects and results"""

from .search import (
    SearchCategory,
    EntityType,
    CardType,
    SearchQuery,
    DetectedIntent,
    SearchResult,
    CardResult,
    PlayerResult,
    TeamResult,
    SeriesResult,
    SearchResponse
)

__all__ = [
    "SearchCategory",
    "EntityType",
    "CardType",
    "SearchQuery",
    "DetectedIntent",
    "SearchResult",
    "CardResult",
    "PlayerResult",
    "TeamResult",
    "SeriesResult",
    "SearchResponse"
]
