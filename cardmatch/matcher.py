"""
Candidate retrieval and ranking against the card catalog.
"""

from typing import List, Optional

from cardmatch.catalog import CatalogQuery, YearRange
from cardmatch.config import DEFAULT_CANDIDATE_LIMIT
from cardmatch.models.card import ExtractedCardData, MatchOutcome, ScoredCandidate
from cardmatch.scorer import DEFAULT_WEIGHTS, ScoringWeights, calculate_card_match_score
from cardmatch.utils.logger import matcher_logger

MIN_MATCH_SCORE = 0.3
MAX_ALTERNATIVES = 3


class CardMatcher:
    """Scores every catalog candidate and keeps the best few."""

    def __init__(
        self,
        catalog: CatalogQuery,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        min_score: float = MIN_MATCH_SCORE,
        max_alternatives: int = MAX_ALTERNATIVES,
    ):
        self.catalog = catalog
        self.weights = weights
        self.candidate_limit = candidate_limit
        self.min_score = min_score
        self.max_alternatives = max_alternatives

    @staticmethod
    def year_range_for(extracted: ExtractedCardData) -> Optional[YearRange]:
        if not extracted.year:
            return None
        return extracted.year - 1, extracted.year + 1

    def rank(self, extracted: ExtractedCardData, candidates) -> List[ScoredCandidate]:
        """Score, drop anything under the minimum, sort best first."""
        scored = [
            ScoredCandidate(
                card=card,
                score=calculate_card_match_score(extracted, card, self.weights),
            )
            for card in candidates
        ]
        kept = [item for item in scored if item.score >= self.min_score]
        # sorted() is stable, so equal scores keep catalog order
        return sorted(kept, key=lambda item: item.score, reverse=True)

    async def find_matching_cards(self, extracted: ExtractedCardData) -> MatchOutcome:
        if not extracted.year and not extracted.player_name:
            return MatchOutcome.empty()

        year_range = self.year_range_for(extracted)
        try:
            candidates = await self.catalog.find_candidates(
                year_range, limit=self.candidate_limit
            )
        except Exception as e:
            # A broken catalog must never lead to an automatic add
            matcher_logger.exception(f"❌ Catalog query failed, treating as no candidates: {e}")
            return MatchOutcome.empty()

        ranked = self.rank(extracted, candidates[: self.candidate_limit])
        matcher_logger.info(
            f"🎯 {len(ranked)}/{len(candidates)} candidates above {self.min_score} "
            f"for player={extracted.player_name!r} year={extracted.year}"
        )
        if not ranked:
            return MatchOutcome.empty()

        best = ranked[0]
        return MatchOutcome(
            best_match=best.card,
            confidence=best.score,
            alternatives=ranked[1 : 1 + self.max_alternatives],
        )
