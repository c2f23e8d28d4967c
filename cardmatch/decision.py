"""
Maps detection and match confidence to the action the caller should take.
"""

from typing import NamedTuple

from cardmatch.models.card import (
    DetectionResult,
    ExtractedCardData,
    MatchOutcome,
    MatchStatus,
)

AUTO_ADD_THRESHOLD = 0.85
SUGGEST_THRESHOLD = 0.60


class Decision(NamedTuple):
    status: MatchStatus
    confidence: float
    reason: str


def combine_confidence(detection_confidence: float, match_confidence: float) -> float:
    return min(detection_confidence + match_confidence, 1.0)


def status_for_confidence(combined: float) -> MatchStatus:
    """Threshold a combined confidence. Both boundaries are inclusive."""
    if combined >= AUTO_ADD_THRESHOLD:
        return MatchStatus.auto_add
    if combined >= SUGGEST_THRESHOLD:
        return MatchStatus.suggest_match
    return MatchStatus.no_match


_MATCH_REASONS = {
    MatchStatus.auto_add: "High confidence match found",
    MatchStatus.suggest_match: "Good match found, user confirmation recommended",
    MatchStatus.no_match: "Sports card detected but no good database match",
}


def decide(
    detection: DetectionResult, match: MatchOutcome, extracted: ExtractedCardData
) -> Decision:
    if not detection.is_card:
        return Decision(
            MatchStatus.not_a_card, detection.confidence, "No sports card keywords detected"
        )

    if not extracted.is_complete:
        return Decision(
            MatchStatus.incomplete_data,
            detection.confidence,
            "Sports card detected but missing player/year information",
        )

    if match.best_match is None:
        return Decision(
            MatchStatus.no_match,
            detection.confidence,
            "Sports card detected but no database match found",
        )

    combined = combine_confidence(detection.confidence, match.confidence)
    status = status_for_confidence(combined)
    return Decision(status, combined, _MATCH_REASONS[status])
