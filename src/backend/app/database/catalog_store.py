"""
Catalog Store

Read-only lookups used by the universal search strategies.

CatalogStore is the interface the search core depends on; SqlCatalogStore is the
SQLAlchemy implementation over the catalog tables. All user-supplied terms are
bound parameters and LIKE wildcards in them are escaped.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional

from sqlalchemy import and_, case, distinct, func, or_, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from sqlalchemy.orm import aliased
from sqlalchemy.sql import ColumnElement, Select

from app.models.search import CardType
from app.services.search.errors import StoreUnavailableError
from .catalog_models import (
    Card,
    CardPlayerTeam,
    CardSet,
    Color,
    Manufacturer,
    Organization,
    Player,
    PlayerTeam,
    Series,
    Team,
)

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"

CONNECTION_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, OSError, asyncio.TimeoutError)


class CatalogStore(ABC):
    """
    Read-only catalog lookups.

    Records are plain dicts keyed by column name. Identifiers are returned in
    the store's native (integer) form; callers stringify them.
    """

    @abstractmethod
    async def find_cards_by_number(
        self,
        card_number: str,
        limit: int,
        player_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Cards whose number contains card_number, optionally joined to a player name"""

    @abstractmethod
    async def find_cards_by_type(
        self,
        card_types: Iterable[CardType],
        limit: int,
        player_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Cards with ANY of the given type flags, optionally filtered by player name"""

    @abstractmethod
    async def find_players(self, query: str, limit: int) -> List[Dict[str, Any]]:
        """Players by substring over first/last/nick name and name concatenations"""

    @abstractmethod
    async def find_teams(self, query: str, limit: int) -> List[Dict[str, Any]]:
        """Teams by substring over name/city/mascot/abbreviation"""

    @abstractmethod
    async def find_series(self, query: str, limit: int) -> List[Dict[str, Any]]:
        """Series by substring over series/set/manufacturer name"""

    @abstractmethod
    async def ping(self) -> bool:
        """True if the store answers a trivial query"""


# ============================================================================
# Query building helpers
# ============================================================================

def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user text is matched literally"""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(term: str) -> str:
    return f"%{escape_like(term)}%"


def _contains(column, term: str) -> ColumnElement:
    return column.ilike(contains_pattern(term), escape=LIKE_ESCAPE)


def _contains_without_apostrophes(column, term: str) -> ColumnElement:
    # "oconnell" must match "O'Connell"
    return func.replace(column, "'", "").ilike(
        contains_pattern(term.replace("'", "")),
        escape=LIKE_ESCAPE
    )


def player_name_condition(name: str) -> ColumnElement:
    """
    Case-insensitive substring match of a name against a player.

    Tries first/last/nick name alone, "first last", "nick last" and
    "first nick last"; for multi-token names also first token -> first (or nick)
    name and the rest -> last name.
    """
    name = name.strip()
    full_name = Player.first_name + " " + Player.last_name
    nick_last = Player.nick_name + " " + Player.last_name
    first_nick_last = Player.first_name + " " + Player.nick_name + " " + Player.last_name

    conditions = [
        _contains(Player.first_name, name),
        _contains(Player.last_name, name),
        _contains(Player.nick_name, name),
        _contains(full_name, name),
        _contains(nick_last, name),
        _contains(first_nick_last, name),
    ]

    conditions.extend([
        _contains_without_apostrophes(Player.first_name, name),
        _contains_without_apostrophes(Player.last_name, name),
        _contains_without_apostrophes(Player.nick_name, name),
        _contains_without_apostrophes(full_name, name),
        _contains_without_apostrophes(nick_last, name),
    ])

    parts = name.split()
    if len(parts) >= 2:
        first, rest = parts[0], " ".join(parts[1:])
        conditions.extend([
            and_(_contains(Player.first_name, first), _contains(Player.last_name, rest)),
            and_(_contains(Player.nick_name, first), _contains(Player.last_name, rest)),
            and_(
                _contains_without_apostrophes(Player.first_name, first),
                _contains_without_apostrophes(Player.last_name, rest)
            ),
        ])

    return or_(*conditions)


def _card_select() -> Select:
    return (
        select(
            Card.card_id,
            Card.card_number,
            Card.is_rookie,
            Card.is_autograph,
            Card.is_relic,
            Card.print_run,
            Series.name.label("series_name"),
            Series.slug.label("series_slug"),
            Series.parallel_of_series,
            CardSet.name.label("set_name"),
            CardSet.slug.label("set_slug"),
            CardSet.year.label("set_year"),
            Manufacturer.name.label("manufacturer_name"),
            Color.name.label("color_name"),
            Color.hex_value.label("color_hex"),
        )
        .select_from(Card)
        .join(Series, Card.series_ref == Series.series_id)
        .join(CardSet, Series.set_ref == CardSet.set_id)
        .outerjoin(Manufacturer, CardSet.manufacturer == Manufacturer.manufacturer_id)
        .outerjoin(Color, Series.color == Color.color_id)
    )


def _card_ids_for_player(player_name: str) -> Select:
    return (
        select(CardPlayerTeam.card)
        .join(PlayerTeam, CardPlayerTeam.player_team == PlayerTeam.player_team_id)
        .join(Player, PlayerTeam.player == Player.player_id)
        .where(player_name_condition(player_name))
    )


def build_card_number_statement(
    card_number: str,
    limit: int,
    player_name: Optional[str] = None
) -> Select:
    """Cards by number substring; exact number matches sort first"""
    stmt = _card_select().where(_contains(Card.card_number, card_number))

    if player_name:
        stmt = stmt.where(Card.card_id.in_(_card_ids_for_player(player_name)))

    exact_first = case((func.lower(Card.card_number) == card_number.lower(), 0), else_=1)
    return stmt.order_by(exact_first, Series.name, Card.card_id).limit(limit)


def build_card_type_statement(
    card_types: Iterable[CardType],
    limit: int,
    player_name: Optional[str] = None
) -> Optional[Select]:
    """Cards having ANY of the requested flags; None if no flag maps to a column"""
    flags = []
    types = set(card_types)
    if CardType.ROOKIE in types:
        flags.append(Card.is_rookie.is_(True))
    if CardType.AUTOGRAPH in types:
        flags.append(Card.is_autograph.is_(True))
    if CardType.RELIC in types:
        flags.append(Card.is_relic.is_(True))
    if CardType.PARALLEL in types:
        flags.append(Series.parallel_of_series.isnot(None))

    if not flags:
        return None

    stmt = _card_select().where(or_(*flags))
    if player_name:
        stmt = stmt.where(Card.card_id.in_(_card_ids_for_player(player_name)))

    return stmt.order_by(Series.name, Card.card_id).limit(limit)


def build_player_statement(query: str, limit: int) -> Select:
    return (
        select(
            Player.player_id,
            Player.first_name,
            Player.last_name,
            Player.nick_name,
            Player.slug,
            Player.card_count,
            Player.is_hof,
        )
        .where(player_name_condition(query))
        .order_by(Player.card_count.desc().nulls_last(), Player.player_id)
        .limit(limit)
    )


def build_team_statement(query: str, limit: int) -> Select:
    card_count = func.count(distinct(CardPlayerTeam.card)).label("card_count")
    player_count = func.count(distinct(PlayerTeam.player)).label("player_count")

    return (
        select(
            Team.team_id,
            Team.name,
            Team.slug,
            Team.city,
            Team.mascot,
            Team.abbreviation,
            Team.primary_color,
            Team.secondary_color,
            Organization.name.label("organization_name"),
            card_count,
            player_count,
        )
        .select_from(Team)
        .outerjoin(Organization, Team.organization == Organization.organization_id)
        .outerjoin(PlayerTeam, PlayerTeam.team == Team.team_id)
        .outerjoin(CardPlayerTeam, CardPlayerTeam.player_team == PlayerTeam.player_team_id)
        .where(or_(
            _contains(Team.name, query),
            _contains(Team.city, query),
            _contains(Team.mascot, query),
            _contains(Team.abbreviation, query),
        ))
        .group_by(
            Team.team_id,
            Team.name,
            Team.slug,
            Team.city,
            Team.mascot,
            Team.abbreviation,
            Team.primary_color,
            Team.secondary_color,
            Organization.name,
        )
        .order_by(card_count.desc(), Team.team_id)
        .limit(limit)
    )


def build_series_statement(query: str, limit: int) -> Select:
    parent = aliased(Series)

    return (
        select(
            Series.series_id,
            Series.name.label("series_name"),
            Series.slug.label("series_slug"),
            Series.card_count,
            Series.rookie_count,
            Series.is_base,
            Series.parallel_of_series,
            Series.print_run_display,
            parent.name.label("parallel_parent_name"),
            CardSet.name.label("set_name"),
            CardSet.slug.label("set_slug"),
            CardSet.year.label("set_year"),
            Manufacturer.name.label("manufacturer_name"),
            Color.name.label("color_name"),
            Color.hex_value.label("color_hex"),
        )
        .select_from(Series)
        .join(CardSet, Series.set_ref == CardSet.set_id)
        .outerjoin(Manufacturer, CardSet.manufacturer == Manufacturer.manufacturer_id)
        .outerjoin(parent, Series.parallel_of_series == parent.series_id)
        .outerjoin(Color, Series.color == Color.color_id)
        .where(or_(
            _contains(Series.name, query),
            _contains(CardSet.name, query),
            _contains(Manufacturer.name, query),
        ))
        .order_by(CardSet.year.desc().nulls_last(), Series.name, Series.series_id)
        .limit(limit)
    )


# ============================================================================
# SqlCatalogStore
# ============================================================================

class SqlCatalogStore(CatalogStore):
    """
    CatalogStore backed by an async SQLAlchemy engine.

    The engine (and its pool) is owned by the caller; this class never disposes it.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        logger.info("SqlCatalogStore initialized with shared engine")

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[AsyncConnection]:
        """Acquire a pooled connection; connection failures become StoreUnavailableError"""
        try:
            conn = await self.engine.connect()
        except CONNECTION_ERRORS as e:
            logger.error(f"Catalog store unreachable: {e}")
            raise StoreUnavailableError(f"Catalog store unreachable: {e}") from e

        try:
            yield conn
        finally:
            await conn.close()

    async def _fetch(self, conn: AsyncConnection, stmt: Select) -> List[Dict[str, Any]]:
        result = await conn.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def find_cards_by_number(
        self,
        card_number: str,
        limit: int,
        player_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        if limit <= 0:
            return []

        async with self._connect() as conn:
            cards = await self._fetch(conn, build_card_number_statement(card_number, limit, player_name))
            return await self._attach_players_and_teams(conn, cards)

    async def find_cards_by_type(
        self,
        card_types: Iterable[CardType],
        limit: int,
        player_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        stmt = build_card_type_statement(card_types, limit, player_name)
        if stmt is None or limit <= 0:
            return []

        async with self._connect() as conn:
            cards = await self._fetch(conn, stmt)
            return await self._attach_players_and_teams(conn, cards)

    async def find_players(self, query: str, limit: int) -> List[Dict[str, Any]]:
        if limit <= 0:
            return []

        async with self._connect() as conn:
            players = await self._fetch(conn, build_player_statement(query, limit))
            return await self._attach_player_teams(conn, players)

    async def find_teams(self, query: str, limit: int) -> List[Dict[str, Any]]:
        if limit <= 0:
            return []

        async with self._connect() as conn:
            return await self._fetch(conn, build_team_statement(query, limit))

    async def find_series(self, query: str, limit: int) -> List[Dict[str, Any]]:
        if limit <= 0:
            return []

        async with self._connect() as conn:
            return await self._fetch(conn, build_series_statement(query, limit))

    async def ping(self) -> bool:
        try:
            async with self._connect() as conn:
                await conn.execute(select(1))
            return True
        except Exception as e:
            logger.warning(f"Catalog store ping failed: {e}")
            return False

    async def _attach_players_and_teams(
        self,
        conn: AsyncConnection,
        cards: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """Add "players" and "teams" lists to each card record"""
        if not cards:
            return cards

        stmt = (
            select(
                CardPlayerTeam.card.label("card_id"),
                Player.player_id,
                Player.first_name,
                Player.last_name,
                Player.slug.label("player_slug"),
                Team.team_id,
                Team.name.label("team_name"),
                Team.abbreviation,
                Team.primary_color,
                Team.secondary_color,
                Team.slug.label("team_slug"),
            )
            .select_from(CardPlayerTeam)
            .join(PlayerTeam, CardPlayerTeam.player_team == PlayerTeam.player_team_id)
            .outerjoin(Player, PlayerTeam.player == Player.player_id)
            .outerjoin(Team, PlayerTeam.team == Team.team_id)
            .where(CardPlayerTeam.card.in_([c["card_id"] for c in cards]))
            .order_by(CardPlayerTeam.card, CardPlayerTeam.card_player_team_id)
        )

        relations: Dict[Any, Dict[str, List[Dict[str, Any]]]] = defaultdict(
            lambda: {"players": [], "teams": []}
        )
        for row in await self._fetch(conn, stmt):
            entry = relations[row["card_id"]]
            if row["player_id"] is not None:
                entry["players"].append({
                    "player_id": row["player_id"],
                    "first_name": row["first_name"],
                    "last_name": row["last_name"],
                    "slug": row["player_slug"],
                })
            if row["team_id"] is not None:
                entry["teams"].append({
                    "team_id": row["team_id"],
                    "name": row["team_name"],
                    "abbreviation": row["abbreviation"],
                    "primary_color": row["primary_color"],
                    "secondary_color": row["secondary_color"],
                    "slug": row["team_slug"],
                })

        for card in cards:
            entry = relations.get(card["card_id"], {"players": [], "teams": []})
            card["players"] = entry["players"]
            card["teams"] = entry["teams"]

        return cards

    async def _attach_player_teams(
        self,
        conn: AsyncConnection,
        players: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """Add a "teams" list to each player record"""
        if not players:
            return players

        stmt = (
            select(
                PlayerTeam.player.label("player_id"),
                Team.team_id,
                Team.name,
                Team.abbreviation,
                Team.primary_color,
                Team.secondary_color,
                Team.slug,
            )
            .select_from(PlayerTeam)
            .join(Team, PlayerTeam.team == Team.team_id)
            .where(PlayerTeam.player.in_([p["player_id"] for p in players]))
            .order_by(PlayerTeam.player, PlayerTeam.player_team_id)
        )

        teams_by_player: Dict[Any, List[Dict[str, Any]]] = defaultdict(list)
        for row in await self._fetch(conn, stmt):
            player_id = row.pop("player_id")
            teams_by_player[player_id].append(row)

        for player in players:
            player["teams"] = teams_by_player.get(player["player_id"], [])

        return players
