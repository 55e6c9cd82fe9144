"""
Team Search Strategy

Substring match over team name, city, mascot and abbreviation.
"""

from typing import List

from app.models.search import DetectedIntent, EntityType, SearchResult
from ..result_formatter import format_team_result
from .base import SearchStrategy


class TeamSearchStrategy(SearchStrategy):
    name = "team"
    entity_type = EntityType.TEAM

    async def _retrieve(self, query: str, intent: DetectedIntent, limit: int) -> List[SearchResult]:
        teams = await self.store.find_teams(query, limit)
        return [format_team_result(team, query) for team in teams]
