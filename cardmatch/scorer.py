"""
Weighted similarity between extracted listing data and a catalog candidate.
"""

import math
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from rapidfuzz.distance import Levenshtein

from cardmatch.models.card import CandidateCard, ExtractedCardData


class ScoringWeights(BaseModel):
    """Per-field weights. They must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    player_name: float = 0.40
    year: float = 0.30
    card_number: float = 0.15
    brand: float = 0.10
    rookie: float = 0.05

    @model_validator(mode="after")
    def _check_sum(self):
        total = math.fsum(self.as_dict().values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"scoring weights must sum to 1.0, got {total}")
        return self

    def as_dict(self) -> Dict[str, float]:
        return {
            "player_name": self.player_name,
            "year": self.year,
            "card_number": self.card_number,
            "brand": self.brand,
            "rookie": self.rookie,
        }


DEFAULT_WEIGHTS = ScoringWeights()


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost insert, delete and substitute."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str, b: str) -> float:
    """
    Normalized Levenshtein similarity in [0, 1].

    Returns 0.0 when either string is empty.
    """
    if not a or not b:
        return 0.0
    return Levenshtein.normalized_similarity(a, b)


def normalize_card_number(card_number: Optional[str]) -> str:
    """Strip '#', whitespace and leading zeros; keep '12/99' style numbers intact."""
    if not card_number:
        return ""
    value = str(card_number).strip().lstrip("#").strip().lower()
    if not value:
        return ""

    parts = value.split("/")
    if len(parts) == 2:
        num = parts[0].strip().lstrip("0") or "0"
        total = parts[1].strip().lstrip("0") or "0"
        return f"{num}/{total}"

    return value.lstrip("0") or "0"


def calculate_card_match_score(
    extracted: ExtractedCardData,
    card: CandidateCard,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """
    Score one candidate against extracted data.

    Fields that cannot be assessed for this pair (a side is missing) are left
    out of both the earned score and the maximum, so a candidate is not
    penalised for data the catalog does not carry.
    """
    score = 0.0
    max_score = 0.0

    candidate_name = card.primary_player_name
    if extracted.player_name and candidate_name:
        max_score += weights.player_name
        score += weights.player_name * string_similarity(
            extracted.player_name.lower(), candidate_name.lower()
        )

    if extracted.year and card.year:
        max_score += weights.year
        year_diff = abs(extracted.year - card.year)
        if year_diff == 0:
            score += weights.year
        elif year_diff == 1:
            score += weights.year / 2

    listing_number = normalize_card_number(extracted.card_number)
    catalog_number = normalize_card_number(card.card_number)
    if listing_number and catalog_number:
        max_score += weights.card_number
        if listing_number == catalog_number:
            score += weights.card_number

    set_names = [n.lower() for n in (card.series.set_name, card.series.name) if n]
    if extracted.brand and set_names:
        max_score += weights.brand
        brand = extracted.brand.lower()
        if any(brand in name for name in set_names):
            score += weights.brand

    max_score += weights.rookie
    if extracted.is_rookie == card.is_rookie:
        score += weights.rookie

    if max_score <= 0:
        return 0.0
    return max(0.0, min(1.0, score / max_score))
