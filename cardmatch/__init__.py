"""Sports card detection and catalog matching for marketplace purchase titles."""

from cardmatch.detection_engine import CardDetectionEngine, detect_and_match_card
from cardmatch.models.card import MatchStatus, PipelineResult

__all__ = [
    "CardDetectionEngine",
    "detect_and_match_card",
    "MatchStatus",
    "PipelineResult",
]
