"""
Result Formatter

Converts catalog store records (plain dicts, integer ids) into typed SearchResult
variants. Every identifier is stringified here so JSON consumers without 64-bit
integer support never see a lossy number.
"""

import re
from typing import Any, Dict, List, Optional

from app.models.search import (
    CardPayload,
    CardResult,
    PlayerPayload,
    PlayerResult,
    SeriesPayload,
    SeriesResult,
    TeamPayload,
    TeamResult,
    TeamSummary,
)
from .scoring import SERIES_SCORE, calculate_player_relevance, calculate_team_relevance


def card_number_slug(card_number: Optional[str]) -> str:
    if not card_number:
        return "unknown"
    return re.sub(r"[^a-z0-9-]", "", card_number.lower()) or "unknown"


def _id(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _team_summary(team: Dict[str, Any]) -> TeamSummary:
    return TeamSummary(
        team_id=str(team["team_id"]),
        name=team.get("name") or None,
        abbreviation=team.get("abbreviation") or None,
        primary_color=team.get("primary_color") or None,
        secondary_color=team.get("secondary_color") or None,
        slug=team.get("slug") or None,
    )


def _player_display_name(player: Dict[str, Any]) -> str:
    first = player.get("first_name") or ""
    last = player.get("last_name") or ""
    return f"{first} {last}".strip()


def format_card_result(card: Dict[str, Any], relevance_score: float) -> CardResult:
    """
    Build a CardResult from a card record.

    Expected record keys: card_id, card_number, is_rookie, is_autograph, is_relic,
    print_run, series_name, series_slug, set_name, set_slug, set_year,
    manufacturer_name, parallel_of_series, color_name, color_hex,
    players (list of dicts), teams (list of dicts).
    """
    players: List[Dict[str, Any]] = card.get("players") or []
    teams: List[Dict[str, Any]] = [t for t in (card.get("teams") or []) if t.get("team_id") is not None]

    player_names = ", ".join(n for n in (_player_display_name(p) for p in players) if n) or None
    primary_team = _team_summary(teams[0]) if teams else None
    player_slug = (players[0].get("slug") if players else None) or "unknown"
    number_slug = card_number_slug(card.get("card_number"))

    payload = CardPayload(
        card_id=str(card["card_id"]),
        card_number=card.get("card_number") or "",
        is_rookie=bool(card.get("is_rookie")),
        is_autograph=bool(card.get("is_autograph")),
        is_relic=bool(card.get("is_relic")),
        is_parallel=card.get("parallel_of_series") is not None,
        series_name=card.get("series_name"),
        set_name=card.get("set_name"),
        set_year=_int(card.get("set_year")),
        manufacturer_name=card.get("manufacturer_name"),
        parallel_of_series=_id(card.get("parallel_of_series")),
        color_name=card.get("color_name"),
        color_hex=card.get("color_hex"),
        player_names=player_names,
        team_name=primary_team.name if primary_team else None,
        team_abbreviation=primary_team.abbreviation if primary_team else None,
        team_primary_color=primary_team.primary_color if primary_team else None,
        team_secondary_color=primary_team.secondary_color if primary_team else None,
        print_run=_int(card.get("print_run")),
        set_slug=card.get("set_slug"),
        series_slug=card.get("series_slug"),
        player_slug=player_slug,
        card_number_slug=number_slug,
        card_slug=f"{number_slug}-{player_slug}",
    )

    return CardResult(
        id=payload.card_id,
        title=f"#{payload.card_number} {player_names or 'Unknown Player'} • {payload.series_name}",
        relevance_score=relevance_score,
        data=payload,
    )


def format_player_result(
    player: Dict[str, Any],
    query: str,
    relevance_score: Optional[float] = None
) -> PlayerResult:
    """Build a PlayerResult; score defaults to calculate_player_relevance()"""
    nick = player.get("nick_name")
    nick_part = f' "{nick}"' if nick else ""
    title = f"{player.get('first_name') or ''}{nick_part} {player.get('last_name') or ''}".strip()

    teams = [_team_summary(t) for t in (player.get("teams") or []) if t.get("team_id") is not None]

    payload = PlayerPayload(
        player_id=str(player["player_id"]),
        first_name=player.get("first_name"),
        last_name=player.get("last_name"),
        nick_name=nick,
        slug=player.get("slug"),
        card_count=int(player.get("card_count") or 0),
        is_hof=bool(player.get("is_hof")),
        teams=teams,
    )

    if relevance_score is None:
        relevance_score = calculate_player_relevance(player, query)

    return PlayerResult(
        id=payload.player_id,
        title=title,
        relevance_score=relevance_score,
        data=payload,
    )


def format_team_result(team: Dict[str, Any], query: str) -> TeamResult:
    payload = TeamPayload(
        team_id=str(team["team_id"]),
        name=team.get("name"),
        slug=team.get("slug"),
        city=team.get("city"),
        mascot=team.get("mascot"),
        abbreviation=team.get("abbreviation"),
        primary_color=team.get("primary_color"),
        secondary_color=team.get("secondary_color"),
        organization_name=team.get("organization_name"),
        card_count=int(team.get("card_count") or 0),
        player_count=int(team.get("player_count") or 0),
    )

    return TeamResult(
        id=payload.team_id,
        title=payload.name or "",
        relevance_score=calculate_team_relevance(team, query),
        data=payload,
    )


def format_series_result(series: Dict[str, Any]) -> SeriesResult:
    print_run_display = series.get("print_run_display")

    payload = SeriesPayload(
        series_id=str(series["series_id"]),
        name=series.get("series_name"),
        series_name=series.get("series_name"),
        card_count=int(series.get("card_count") or 0),
        rookie_count=int(series.get("rookie_count") or 0),
        is_base=bool(series.get("is_base")),
        parallel_of_series=_id(series.get("parallel_of_series")),
        is_parallel=series.get("parallel_of_series") is not None,
        parallel_parent_name=series.get("parallel_parent_name"),
        set_name=series.get("set_name"),
        set_year=_int(series.get("set_year")),
        manufacturer_name=series.get("manufacturer_name"),
        color_name=series.get("color_name"),
        color_hex=series.get("color_hex"),
        print_run_display=str(print_run_display) if print_run_display is not None else None,
        slug=series.get("series_slug"),
        set_slug=series.get("set_slug"),
    )

    return SeriesResult(
        id=payload.series_id,
        title=payload.series_name or "",
        relevance_score=SERIES_SCORE,
        data=payload,
    )
