"""
Relevance heuristics for entity results.

Scores are additive integers used only for ordering; they are computed by the
strategy that owns the entity type, before global ranking.
"""

from typing import Any, Dict, Optional

SERIES_SCORE = 75


def _lower(value: Optional[Any]) -> str:
    return str(value).lower() if value is not None else ""


def calculate_player_relevance(player: Dict[str, Any], query: str) -> int:
    """
    Score a player record against the raw query.

    base 50
    +40 "first last" equals query, else +25 if it contains the query
    +30 first name equals, +30 last name equals, +35 nickname equals
    +10 Hall of Fame, +5 more than 1000 cards
    """
    score = 50
    q = query.strip().lower()
    first = _lower(player.get("first_name"))
    last = _lower(player.get("last_name"))
    nick = _lower(player.get("nick_name"))
    full_name = f"{first} {last}"

    if full_name == q:
        score += 40
    elif q in full_name:
        score += 25

    if first and first == q:
        score += 30
    if last and last == q:
        score += 30
    if nick and nick == q:
        score += 35

    if player.get("is_hof"):
        score += 10
    if int(player.get("card_count") or 0) > 1000:
        score += 5

    return score


def calculate_team_relevance(team: Dict[str, Any], query: str) -> int:
    """
    Score a team record against the raw query.

    base 50
    +40 abbreviation equals, +25 name contains, +20 city contains, +20 mascot contains
    """
    score = 50
    q = query.strip().lower()

    abbreviation = _lower(team.get("abbreviation"))
    if abbreviation and abbreviation == q:
        score += 40
    if q in _lower(team.get("name")) and team.get("name"):
        score += 25
    if q in _lower(team.get("city")) and team.get("city"):
        score += 20
    if q in _lower(team.get("mascot")) and team.get("mascot"):
        score += 20

    return score
