"""
Universal Search Data Models

Value objects shared by the query analyzer, retrieval strategies, ranker and API layer:
- SearchQuery / SearchCategory: what the caller asked for
- DetectedIntent: signals parsed out of the raw query text
- SearchResult: tagged union (card | player | team | series) with typed payloads
- SearchResponse: envelope returned to the HTTP layer
"""

from enum import Enum
from typing import Annotated, FrozenSet, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SearchCategory(str, Enum):
    """Category filter requested by the caller"""
    ALL = "all"
    CARDS = "cards"
    PLAYERS = "players"
    TEAMS = "teams"
    SERIES = "series"


class EntityType(str, Enum):
    """The four searchable record kinds"""
    CARD = "card"
    PLAYER = "player"
    TEAM = "team"
    SERIES = "series"

    @property
    def priority(self) -> int:
        """Tie-break priority used when relevance scores are equal (higher sorts first)"""
        return TYPE_PRIORITY[self]


TYPE_PRIORITY = {
    EntityType.CARD: 4,
    EntityType.PLAYER: 3,
    EntityType.TEAM: 2,
    EntityType.SERIES: 1,
}


class CardType(str, Enum):
    """Card attribute keywords recognised in queries"""
    ROOKIE = "rookie"
    AUTOGRAPH = "autograph"
    RELIC = "relic"
    PARALLEL = "parallel"


class SearchQuery(BaseModel):
    """Immutable search request"""
    model_config = ConfigDict(frozen=True)

    text: str
    limit: int = 50
    category: SearchCategory = SearchCategory.ALL


class DetectedIntent(BaseModel):
    """
    Signals derived from a raw query by QueryAnalyzer.

    Attributes:
        card_number: Leading card-number token (e.g. "108", "RC-1")
        player_name_remainder: Text following the card number
        card_number_with_player: True iff both card_number and remainder were found
        card_types: Card attribute keywords present anywhere in the query
        year_hint: First 19xx/20xx token
        team_abbreviation_hints: Known team abbreviations found as substrings
        name_text: Query with whole-word card-type keywords removed
    """
    model_config = ConfigDict(frozen=True)

    card_number: Optional[str] = None
    player_name_remainder: Optional[str] = None
    card_number_with_player: bool = False
    card_types: FrozenSet[CardType] = frozenset()
    year_hint: Optional[int] = Field(default=None, ge=1900, le=2099)
    team_abbreviation_hints: FrozenSet[str] = frozenset()
    name_text: Optional[str] = None

    @model_validator(mode="after")
    def _check_card_number_with_player(self) -> "DetectedIntent":
        if self.card_number_with_player and not (
            self.card_number and self.player_name_remainder and self.player_name_remainder.strip()
        ):
            raise ValueError(
                "card_number_with_player requires card_number and a non-empty player_name_remainder"
            )
        return self

    @property
    def is_empty(self) -> bool:
        return (
            self.card_number is None
            and not self.card_types
            and self.year_hint is None
            and not self.team_abbreviation_hints
            and not self.name_text
        )


# ============================================================================
# Entity payloads
# ============================================================================

class TeamSummary(BaseModel):
    """Team reference embedded in card and player payloads"""
    team_id: str
    name: Optional[str] = None
    abbreviation: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    slug: Optional[str] = None


class CardPayload(BaseModel):
    card_id: str
    card_number: str
    is_rookie: bool = False
    is_autograph: bool = False
    is_relic: bool = False
    is_parallel: bool = False
    series_name: Optional[str] = None
    set_name: Optional[str] = None
    set_year: Optional[int] = None
    manufacturer_name: Optional[str] = None
    parallel_of_series: Optional[str] = None
    color_name: Optional[str] = None
    color_hex: Optional[str] = None
    player_names: Optional[str] = None
    team_name: Optional[str] = None
    team_abbreviation: Optional[str] = None
    team_primary_color: Optional[str] = None
    team_secondary_color: Optional[str] = None
    print_run: Optional[int] = None
    set_slug: Optional[str] = None
    series_slug: Optional[str] = None
    player_slug: str = "unknown"
    card_number_slug: str = "unknown"
    card_slug: str = "unknown-unknown"


class PlayerPayload(BaseModel):
    player_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nick_name: Optional[str] = None
    slug: Optional[str] = None
    card_count: int = 0
    is_hof: bool = False
    teams: List[TeamSummary] = Field(default_factory=list)


class TeamPayload(BaseModel):
    team_id: str
    name: Optional[str] = None
    slug: Optional[str] = None
    city: Optional[str] = None
    mascot: Optional[str] = None
    abbreviation: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    organization_name: Optional[str] = None
    card_count: int = 0
    player_count: int = 0


class SeriesPayload(BaseModel):
    series_id: str
    name: Optional[str] = None
    series_name: Optional[str] = None
    card_count: int = 0
    rookie_count: int = 0
    is_base: bool = False
    parallel_of_series: Optional[str] = None
    is_parallel: bool = False
    parallel_parent_name: Optional[str] = None
    set_name: Optional[str] = None
    set_year: Optional[int] = None
    manufacturer_name: Optional[str] = None
    color_name: Optional[str] = None
    color_hex: Optional[str] = None
    print_run_display: Optional[str] = None
    slug: Optional[str] = None
    set_slug: Optional[str] = None


# ============================================================================
# Search results (tagged union)
# ============================================================================

class BaseSearchResult(BaseModel):
    """Fields shared by every result variant"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    relevance_score: float = Field(alias="relevanceScore")

    @property
    def entity_type(self) -> EntityType:
        return EntityType(self.type)  # type: ignore[attr-defined]

    @property
    def key(self) -> Tuple[str, str]:
        """Identity of a result: (entity type, entity id)"""
        return (self.type, self.id)  # type: ignore[attr-defined]


class CardResult(BaseSearchResult):
    type: Literal["card"] = "card"
    data: CardPayload


class PlayerResult(BaseSearchResult):
    type: Literal["player"] = "player"
    data: PlayerPayload


class TeamResult(BaseSearchResult):
    type: Literal["team"] = "team"
    data: TeamPayload


class SeriesResult(BaseSearchResult):
    type: Literal["series"] = "series"
    data: SeriesPayload


SearchResult = Annotated[
    Union[CardResult, PlayerResult, TeamResult, SeriesResult],
    Field(discriminator="type"),
]


class SearchResponse(BaseModel):
    """Envelope returned by SearchOrchestrator.search()"""
    model_config = ConfigDict(populate_by_name=True)

    query: str
    results: List[SearchResult] = Field(default_factory=list)
    total_results: int = Field(default=0, alias="totalResults")
    search_time_ms: Optional[float] = Field(default=None, alias="searchTimeMs")

    @classmethod
    def empty(cls, query: str) -> "SearchResponse":
        return cls(query=query, results=[], total_results=0, search_time_ms=0.0)
