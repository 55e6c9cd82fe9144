"""
Search Strategy Package

Contains all universal search retrieval strategy implementations.
"""

from .base import SearchStrategy
from .card_number_player_strategy import CardNumberPlayerSearchStrategy
from .card_number_strategy import CardNumberSearchStrategy
from .card_type_strategy import CardTypeSearchStrategy
from .player_strategy import PlayerSearchStrategy
from .series_strategy import SeriesSearchStrategy
from .team_strategy import TeamSearchStrategy

__all__ = [
    "SearchStrategy",
    "CardNumberPlayerSearchStrategy",
    "CardNumberSearchStrategy",
    "CardTypeSearchStrategy",
    "PlayerSearchStrategy",
    "TeamSearchStrategy",
    "SeriesSearchStrategy",
]
