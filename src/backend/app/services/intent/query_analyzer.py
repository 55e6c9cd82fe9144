"""
Query Analyzer

Parses free-text search input into a DetectedIntent:
- Leading card-number token (108, RC-1, BDC-171, US110, 57b)
- Player-name remainder after the card number
- Card-type keywords (rookie, autograph, relic, parallel)
- Year hint (19xx / 20xx)
- Team-abbreviation hints

Pure function of the query text; no I/O.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from app.models.search import CardType, DetectedIntent

logger = logging.getLogger(__name__)


# Ordered most specific first. Each pattern must match the whole leading token.
CARD_NUMBER_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("complex_hyphenated", re.compile(r"[A-Z0-9]{2,}[A-Z]{1,3}-[A-Z0-9]{1,3}", re.IGNORECASE)),
    ("standard_hyphenated", re.compile(r"[A-Z]{1,4}-[A-Z0-9]{1,4}", re.IGNORECASE)),
    ("letters_numbers", re.compile(r"[A-Z]{1,4}\d{1,4}[A-Z]?", re.IGNORECASE)),
    ("numbers_letters", re.compile(r"\d{1,4}[A-Z]{1,2}", re.IGNORECASE)),
    ("pure_number", re.compile(r"\d{1,4}")),
]

YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")

DEFAULT_CARD_TYPE_KEYWORDS: Dict[CardType, List[str]] = {
    CardType.ROOKIE: ["rookie", "rc"],
    CardType.AUTOGRAPH: ["autograph", "auto"],
    CardType.RELIC: ["relic", "jersey", "patch"],
    CardType.PARALLEL: ["parallel", "/"],
}

DEFAULT_TEAM_ABBREVIATIONS: List[str] = [
    "bos", "nyy", "laa", "tor", "tb", "bal", "cws", "cle",
    "det", "kc", "min", "hou", "oak", "sea", "tex",
]


class QueryAnalyzer:
    """
    Derives search intent from raw query text.

    Keyword vocabularies default to the module constants and can be overridden
    from the "query_analysis" section of search_config.json.
    """

    def __init__(
        self,
        card_type_keywords: Optional[Dict[str, Iterable[str]]] = None,
        team_abbreviations: Optional[Iterable[str]] = None
    ):
        if card_type_keywords:
            self.card_type_keywords = {
                CardType(card_type): [k.lower() for k in keywords]
                for card_type, keywords in card_type_keywords.items()
            }
        else:
            self.card_type_keywords = DEFAULT_CARD_TYPE_KEYWORDS

        self.team_abbreviations = [
            a.lower() for a in (team_abbreviations or DEFAULT_TEAM_ABBREVIATIONS)
        ]

        # Whole-word keywords stripped from name_text ("/" is never a word)
        self._strip_words = {
            keyword
            for keywords in self.card_type_keywords.values()
            for keyword in keywords
            if keyword.isalnum()
        }

    @classmethod
    def from_config(cls, config: Dict) -> "QueryAnalyzer":
        """Build from the "query_analysis" section of search_config.json"""
        return cls(
            card_type_keywords=config.get("card_type_keywords"),
            team_abbreviations=config.get("team_abbreviations"),
        )

    def analyze(self, query: str) -> DetectedIntent:
        """
        Analyze a raw query.

        Args:
            query: Raw user input

        Returns:
            DetectedIntent (all fields empty for blank input)
        """
        text = (query or "").strip()
        if not text:
            return DetectedIntent()

        lower_text = text.lower()

        card_number, remainder = self.detect_card_number(text)
        card_number_with_player = bool(card_number and remainder)

        intent = DetectedIntent(
            card_number=card_number,
            player_name_remainder=remainder or None,
            card_number_with_player=card_number_with_player,
            card_types=self._detect_card_types(lower_text),
            year_hint=self._detect_year(text),
            team_abbreviation_hints=frozenset(
                abbrev for abbrev in self.team_abbreviations if abbrev in lower_text
            ),
            name_text=self._strip_card_type_words(text),
        )

        logger.debug(f"Search intent detected for '{text}': {intent.model_dump()}")
        return intent

    def detect_card_number(self, text: str) -> Tuple[Optional[str], str]:
        """
        Match the leading token against the card-number patterns.

        Returns:
            (card_number, remaining_text); (None, "") when no pattern matches
        """
        parts = text.strip().split(None, 1)
        if not parts:
            return None, ""

        token = parts[0]
        for pattern_name, pattern in CARD_NUMBER_PATTERNS:
            if pattern.fullmatch(token):
                remainder = parts[1].strip() if len(parts) > 1 else ""
                logger.debug(f"Matched {pattern_name} card number '{token}', remaining: '{remainder}'")
                return token, remainder

        return None, ""

    def _detect_card_types(self, lower_text: str) -> frozenset:
        return frozenset(
            card_type
            for card_type, keywords in self.card_type_keywords.items()
            if any(keyword in lower_text for keyword in keywords)
        )

    @staticmethod
    def _detect_year(text: str) -> Optional[int]:
        match = YEAR_PATTERN.search(text)
        return int(match.group(0)) if match else None

    def _strip_card_type_words(self, text: str) -> Optional[str]:
        words = [w for w in text.split() if w.lower() not in self._strip_words]
        remaining = " ".join(words).strip()
        return remaining or None
