import pytest

from cardmatch.decision import (
    AUTO_ADD_THRESHOLD,
    SUGGEST_THRESHOLD,
    combine_confidence,
    decide,
    status_for_confidence,
)
from cardmatch.models.card import (
    DetectionResult,
    ExtractedCardData,
    MatchOutcome,
    MatchStatus,
)
from conftest import make_card

CARD = DetectionResult(is_card=True, confidence=0.3, reasons=["Found sport: baseball"])
COMPLETE = ExtractedCardData(year=2024, player_name="Mike Trout")


@pytest.mark.parametrize(
    "combined,expected",
    [
        (1.0, MatchStatus.auto_add),
        (0.85, MatchStatus.auto_add),
        (0.8499999, MatchStatus.suggest_match),
        (0.60, MatchStatus.suggest_match),
        (0.5999999, MatchStatus.no_match),
        (0.0, MatchStatus.no_match),
    ],
)
def test_thresholds_are_inclusive(combined, expected):
    assert status_for_confidence(combined) == expected


def test_threshold_constants():
    assert AUTO_ADD_THRESHOLD == 0.85
    assert SUGGEST_THRESHOLD == 0.60


def test_combined_confidence_is_capped():
    assert combine_confidence(1.0, 0.9) == 1.0
    assert combine_confidence(0.3, 0.4) == pytest.approx(0.7)


def test_not_a_card_wins_over_everything():
    detection = DetectionResult(is_card=False, confidence=0.2)
    match = MatchOutcome(best_match=make_card("1"), confidence=1.0)

    decision = decide(detection, match, COMPLETE)

    assert decision.status == MatchStatus.not_a_card
    assert decision.confidence == 0.2


def test_missing_year_is_incomplete_even_with_a_match():
    match = MatchOutcome(best_match=make_card("1"), confidence=1.0)

    decision = decide(CARD, match, ExtractedCardData(player_name="Mike Trout"))

    assert decision.status == MatchStatus.incomplete_data
    assert decision.confidence == 0.3
    assert "missing player/year" in decision.reason


def test_missing_player_is_incomplete():
    decision = decide(CARD, MatchOutcome.empty(), ExtractedCardData(year=2024))
    assert decision.status == MatchStatus.incomplete_data


def test_no_best_match_is_no_match():
    decision = decide(CARD, MatchOutcome.empty(), COMPLETE)

    assert decision.status == MatchStatus.no_match
    assert decision.confidence == 0.3
    assert decision.reason == "Sports card detected but no database match found"


def test_weak_combined_confidence_is_no_match():
    detection = DetectionResult(is_card=True, confidence=0.1)
    match = MatchOutcome(best_match=make_card("1"), confidence=0.35)

    decision = decide(detection, match, COMPLETE)

    assert decision.status == MatchStatus.no_match
    assert decision.confidence == pytest.approx(0.45)


def test_suggest_and_auto_add():
    match = MatchOutcome(best_match=make_card("1"), confidence=0.45)
    assert decide(CARD, match, COMPLETE).status == MatchStatus.suggest_match

    strong = MatchOutcome(best_match=make_card("1"), confidence=0.6)
    decision = decide(CARD, strong, COMPLETE)
    assert decision.status == MatchStatus.auto_add
    assert decision.reason == "High confidence match found"
