"""
Sports card detection for marketplace listing titles.

Scores a title with weighted keyword hits and a few pattern bonuses:

    sport keyword (first group only)    0.25 - 0.3
    card indicator groups (additive)    0.2  - 0.4 each
    four digit year 1900-2099           0.15
    card number pattern                 0.1
    grading reference                   0.1

The title is a card when a sport and a card indicator were both found, or
when the summed confidence reaches the threshold on its own.
"""

import re
from typing import List, Optional

from cardmatch.models.card import DetectionResult
from cardmatch.utils.logger import detector_logger
from cardmatch.vocabulary import DEFAULT_DETECTION_VOCABULARY, DetectionVocabulary

YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
CARD_NUMBER_PATTERN = re.compile(r"#\d+|card\s+\d+|\b\d+/\d+\b")
GRADING_PATTERN = re.compile(r"\b(?:psa|bgs|sgc)\s+\d+|\bgraded\b|\bmint\b")


class SportsCardDetector:
    """Weighted keyword classifier for "is this a sports card listing"."""

    def __init__(self, vocabulary: Optional[DetectionVocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_DETECTION_VOCABULARY

    def detect(self, title: str) -> DetectionResult:
        if not title:
            return DetectionResult(is_card=False, confidence=0.0, reasons=[])

        title_lower = title.lower()
        vocab = self.vocabulary
        confidence = 0.0
        reasons: List[str] = []

        # Only one sport is credited, even for multi-sport titles
        found_sport = False
        for group in vocab.sport_groups:
            if group.matches(title_lower):
                confidence += group.weight
                found_sport = True
                reasons.append(f"Found sport: {group.label}")
                break

        found_card = False
        for group in vocab.card_groups:
            if group.matches(title_lower):
                confidence += group.weight
                found_card = True
                reasons.append(f"Found card keyword: {group.label}")

        year_match = YEAR_PATTERN.search(title_lower)
        if year_match:
            confidence += vocab.year_bonus
            reasons.append(f"Found year: {year_match.group(0)}")

        if CARD_NUMBER_PATTERN.search(title_lower):
            confidence += vocab.card_number_bonus
            reasons.append("Found card number pattern")

        if GRADING_PATTERN.search(title_lower):
            confidence += vocab.grading_bonus
            reasons.append("Found grading reference")

        # Rounded so that sums like 0.3 + 0.1 compare cleanly against the threshold
        confidence = round(min(confidence, 1.0), 6)
        is_card = (found_sport and found_card) or confidence >= vocab.card_threshold

        detector_logger.debug(
            f'detect "{title}" -> is_card={is_card} confidence={confidence:.2f}'
        )
        return DetectionResult(is_card=is_card, confidence=confidence, reasons=reasons)


def detect_sports_card(title: str) -> DetectionResult:
    """Detect with the default vocabulary."""
    return SportsCardDetector().detect(title)
