"""
Card detection and matching engine.

Turns a marketplace purchase title into a PipelineResult:

    detect -> extract -> match against the catalog -> decide

The engine holds no state between calls. The only I/O is one catalog query per
listing, and a failing catalog degrades the result to `no_match`.
"""

import math
from typing import Any, Optional

from cardmatch.catalog import CatalogQuery, SupabaseCatalog
from cardmatch.config import get_settings
from cardmatch.decision import decide
from cardmatch.detector import SportsCardDetector
from cardmatch.extractor import CardDataExtractor
from cardmatch.matcher import CardMatcher
from cardmatch.models.card import MatchOutcome, PipelineResult, RawListing
from cardmatch.utils.logger import engine_logger


def normalize_listing(title: Any, price: Any = 0) -> RawListing:
    """Coerce caller input into a RawListing without raising."""
    clean_title = title.strip() if isinstance(title, str) else ""

    try:
        clean_price = float(price)
    except (TypeError, ValueError):
        clean_price = 0.0
    if not math.isfinite(clean_price) or clean_price < 0:
        clean_price = 0.0

    return RawListing(title=clean_title, price=clean_price)


class CardDetectionEngine:
    def __init__(
        self,
        catalog: Optional[CatalogQuery] = None,
        detector: Optional[SportsCardDetector] = None,
        extractor: Optional[CardDataExtractor] = None,
        matcher: Optional[CardMatcher] = None,
    ):
        self.detector = detector or SportsCardDetector()
        self.extractor = extractor or CardDataExtractor()
        if matcher is None:
            matcher = CardMatcher(
                catalog or SupabaseCatalog(),
                candidate_limit=get_settings().catalog_candidate_limit,
            )
        self.matcher = matcher

    async def detect_and_match_card(self, title: Any, price: Any = 0) -> PipelineResult:
        """
        Detect, extract and match a single listing title.

        Args:
            title: Listing title. Anything that is not a non-empty string is
                treated as an empty title and yields `not_a_card`.
            price: Purchase price. Accepted for interface stability, not scored.

        Returns:
            PipelineResult; this method does not raise for any input.
        """
        listing = normalize_listing(title, price)

        detection = self.detector.detect(listing.title)
        if not detection.is_card:
            engine_logger.debug(f'not a card: "{listing.title}"')
            return PipelineResult(
                is_card=False,
                confidence=detection.confidence,
                detection_reasons=detection.reasons,
            )

        extracted = self.extractor.extract(listing.title)

        match = MatchOutcome.empty()
        if extracted.is_complete:
            match = await self.matcher.find_matching_cards(extracted)

        decision = decide(detection, match, extracted)
        engine_logger.info(
            f'🃏 "{listing.title}" -> {decision.status.value} '
            f"(confidence={decision.confidence:.2f})"
        )

        return PipelineResult(
            is_card=True,
            confidence=decision.confidence,
            extracted_data=extracted,
            matched_card=match.best_match,
            alternatives=match.alternatives,
            status=decision.status,
            reason=decision.reason,
            detection_reasons=detection.reasons,
        )


_default_engine: Optional[CardDetectionEngine] = None


def get_default_engine() -> CardDetectionEngine:
    """Engine backed by the Supabase catalog, created on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = CardDetectionEngine()
    return _default_engine


async def detect_and_match_card(
    title: Any, price: Any = 0, engine: Optional[CardDetectionEngine] = None
) -> PipelineResult:
    """Main entry point for purchase processing."""
    return await (engine or get_default_engine()).detect_and_match_card(title, price)
