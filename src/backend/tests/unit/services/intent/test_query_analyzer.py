"""
Unit tests for QueryAnalyzer

Covers card-number token detection, card-type keywords, year hints,
team-abbreviation hints and the DetectedIntent invariant.
"""

import pytest
from pydantic import ValidationError

from app.models.search import CardType, DetectedIntent
from app.services.intent.query_analyzer import QueryAnalyzer


@pytest.mark.unit
class TestCardNumberDetection:
    """Leading-token card number patterns"""

    @pytest.fixture
    def analyzer(self):
        return QueryAnalyzer()

    @pytest.mark.parametrize("token", ["108", "1", "RC-1", "BDC-171", "US110", "57b", "T206", "CPA-MT"])
    def test_card_number_tokens(self, analyzer, token):
        intent = analyzer.analyze(token)
        assert intent.card_number == token
        assert intent.card_number_with_player is False
        assert intent.player_name_remainder is None

    def test_card_number_with_player(self, analyzer):
        intent = analyzer.analyze("108 john smith")
        assert intent.card_number == "108"
        assert intent.player_name_remainder == "john smith"
        assert intent.card_number_with_player is True

    def test_hyphenated_number_with_player(self, analyzer):
        intent = analyzer.analyze("RC-1 Trout")
        assert intent.card_number == "RC-1"
        assert intent.player_name_remainder == "Trout"
        assert intent.card_number_with_player is True

    def test_only_leading_token_is_considered(self, analyzer):
        intent = analyzer.analyze("mike trout 27")
        assert intent.card_number is None
        assert intent.card_number_with_player is False

    def test_plain_word_is_not_a_card_number(self, analyzer):
        assert analyzer.analyze("angels").card_number is None

    def test_five_digit_number_is_not_a_card_number(self, analyzer):
        assert analyzer.analyze("12345").card_number is None

    def test_surrounding_whitespace_is_ignored(self, analyzer):
        intent = analyzer.analyze("   108    john smith  ")
        assert intent.card_number == "108"
        assert intent.player_name_remainder == "john smith"

    def test_blank_query_gives_empty_intent(self, analyzer):
        assert analyzer.analyze("   ").is_empty


@pytest.mark.unit
class TestKeywordDetection:
    """Card-type keywords, year and team hints"""

    @pytest.fixture
    def analyzer(self):
        return QueryAnalyzer()

    def test_rookie_keyword(self, analyzer):
        intent = analyzer.analyze("rookie trout")
        assert intent.card_types == frozenset({CardType.ROOKIE})
        assert intent.name_text == "trout"

    def test_rc_keyword(self, analyzer):
        assert CardType.ROOKIE in analyzer.analyze("trout RC").card_types

    def test_multiple_card_types_accumulate(self, analyzer):
        intent = analyzer.analyze("rookie auto patch")
        assert intent.card_types == frozenset({CardType.ROOKIE, CardType.AUTOGRAPH, CardType.RELIC})
        assert intent.name_text is None

    def test_slash_means_parallel(self, analyzer):
        assert CardType.PARALLEL in analyzer.analyze("trout /99").card_types

    def test_no_card_types(self, analyzer):
        assert analyzer.analyze("mike trout").card_types == frozenset()

    def test_year_hint(self, analyzer):
        assert analyzer.analyze("topps 2011 update").year_hint == 2011

    def test_year_outside_range_ignored(self, analyzer):
        assert analyzer.analyze("topps 1850").year_hint is None

    def test_team_abbreviation_hints(self, analyzer):
        intent = analyzer.analyze("trout laa")
        assert "laa" in intent.team_abbreviation_hints

    def test_custom_vocabulary_from_config(self):
        analyzer = QueryAnalyzer.from_config({
            "card_type_keywords": {"autograph": ["signed"]},
            "team_abbreviations": ["SFG"],
        })
        intent = analyzer.analyze("signed posey sfg")
        assert intent.card_types == frozenset({CardType.AUTOGRAPH})
        assert intent.team_abbreviation_hints == frozenset({"sfg"})


@pytest.mark.unit
class TestDetectedIntentInvariant:
    """card_number_with_player requires both parts"""

    def test_with_player_requires_remainder(self):
        with pytest.raises(ValidationError):
            DetectedIntent(card_number="108", card_number_with_player=True)

    def test_with_player_requires_card_number(self):
        with pytest.raises(ValidationError):
            DetectedIntent(player_name_remainder="trout", card_number_with_player=True)

    def test_year_hint_bounds(self):
        with pytest.raises(ValidationError):
            DetectedIntent(year_hint=2100)
