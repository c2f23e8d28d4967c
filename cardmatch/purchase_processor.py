"""
Caller-side processing of marketplace purchases.

Interprets each PipelineResult as an action and hands the write to an optional
PurchaseSink. Without a sink the processor only classifies. Batches run one
listing at a time with a short pause between invocations to keep load on the
catalog bounded; a failing listing is counted and never aborts the batch.
"""

import asyncio
from enum import Enum
from typing import Iterable, List, Optional, Protocol

from pydantic import BaseModel, Field

from cardmatch.config import get_settings
from cardmatch.detection_engine import CardDetectionEngine
from cardmatch.models.card import (
    CandidateCard,
    MatchStatus,
    PipelineResult,
    RawListing,
    ScoredCandidate,
)
from cardmatch.utils.logger import (
    log_batch_progress,
    log_success,
    processor_logger,
)


class PurchaseAction(str, Enum):
    auto_added = "auto_added"
    suggested = "suggested"
    unmatched = "unmatched"
    needs_review = "needs_review"
    ignored = "ignored"
    error = "error"


class PurchaseSink(Protocol):
    """Writes performed on behalf of the processor by the owning service."""

    async def add_to_collection(self, listing: RawListing, card: CandidateCard) -> None: ...

    async def queue_suggestion(
        self,
        listing: RawListing,
        card: CandidateCard,
        alternatives: List[ScoredCandidate],
    ) -> None: ...

    async def update_purchase_status(
        self, listing: RawListing, status: str, details: str
    ) -> None: ...


class PurchaseOutcome(BaseModel):
    listing: RawListing
    action: PurchaseAction
    message: str
    confidence: float = 0.0
    result: Optional[PipelineResult] = None


class BatchSummary(BaseModel):
    total: int = 0
    auto_added: int = 0
    suggested: int = 0
    unmatched: int = 0
    needs_review: int = 0
    ignored: int = 0
    errors: int = 0
    outcomes: List[PurchaseOutcome] = Field(default_factory=list)

    def record(self, outcome: PurchaseOutcome):
        self.outcomes.append(outcome)
        if outcome.action == PurchaseAction.error:
            self.errors += 1
        else:
            setattr(self, outcome.action.value, getattr(self, outcome.action.value) + 1)


def _player_label(result: PipelineResult, fallback: str = "card") -> str:
    if result.extracted_data and result.extracted_data.player_name:
        return result.extracted_data.player_name
    return fallback


async def process_purchase(
    listing: RawListing,
    engine: CardDetectionEngine,
    sink: Optional[PurchaseSink] = None,
) -> PurchaseOutcome:
    """Run the pipeline for one purchase and act on its status."""
    result = await engine.detect_and_match_card(listing.title, listing.price)

    if result.status == MatchStatus.auto_add and result.matched_card:
        action = PurchaseAction.auto_added
        message = f"Automatically added {_player_label(result)} to collection"
        if sink:
            await sink.add_to_collection(listing, result.matched_card)
            await sink.update_purchase_status(
                listing,
                action.value,
                f"Added to collection as card ID {result.matched_card.card_id}",
            )

    elif result.status == MatchStatus.suggest_match and result.matched_card:
        action = PurchaseAction.suggested
        message = f"Found possible match for {_player_label(result)} - review suggested"
        if sink:
            await sink.queue_suggestion(listing, result.matched_card, result.alternatives)
            await sink.update_purchase_status(
                listing,
                "suggested_match",
                f"Possible match found: {result.matched_card.card_id}",
            )

    elif result.status == MatchStatus.not_a_card:
        action = PurchaseAction.ignored
        message = "Not identified as a sports card"
        if sink:
            await sink.update_purchase_status(listing, result.status.value, result.reason)

    elif result.status == MatchStatus.no_match:
        action = PurchaseAction.unmatched
        message = f"No catalog match for {_player_label(result, 'unknown card')}"
        if sink:
            await sink.update_purchase_status(listing, result.status.value, result.reason)

    else:
        action = PurchaseAction.needs_review
        message = "Sports card detected but needs manual review"
        if sink:
            await sink.update_purchase_status(listing, action.value, result.reason)

    return PurchaseOutcome(
        listing=listing,
        action=action,
        message=message,
        confidence=result.confidence,
        result=result,
    )


async def process_purchases_batch(
    listings: Iterable[RawListing],
    engine: CardDetectionEngine,
    sink: Optional[PurchaseSink] = None,
    delay_seconds: Optional[float] = None,
) -> BatchSummary:
    """Process purchases sequentially, pausing between invocations."""
    listings = list(listings)
    delay = get_settings().batch_delay_seconds if delay_seconds is None else delay_seconds
    summary = BatchSummary(total=len(listings))

    processor_logger.info(f"🚀 Starting purchase batch: {len(listings)} listings")

    for i, listing in enumerate(listings, 1):
        log_batch_progress(processor_logger, i, len(listings), listing.title)
        try:
            outcome = await process_purchase(listing, engine, sink)
            if outcome.action == PurchaseAction.auto_added:
                label = listing.listing_id or listing.title
                log_success(processor_logger, f"{label}: {outcome.message}")
        except Exception as e:
            processor_logger.exception(
                f"❌ Error processing purchase {listing.listing_id or listing.title!r}: {e}"
            )
            outcome = PurchaseOutcome(
                listing=listing,
                action=PurchaseAction.error,
                message=f"Processing error: {e}",
            )
        summary.record(outcome)

        if i < len(listings) and delay > 0:
            await asyncio.sleep(delay)

    processor_logger.info(
        f"🏁 Batch completed: {summary.auto_added} added, {summary.suggested} suggested, "
        f"{summary.unmatched} unmatched, {summary.needs_review} to review, "
        f"{summary.ignored} ignored, {summary.errors} errors"
    )
    return summary
