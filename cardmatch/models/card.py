"""
Pydantic models for listings, detection/extraction results, catalog candidates
and the final pipeline result.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MatchStatus(str, Enum):
    not_a_card = "not_a_card"
    auto_add = "auto_add"
    suggest_match = "suggest_match"
    no_match = "no_match"
    incomplete_data = "incomplete_data"


class RawListing(BaseModel):
    """A marketplace purchase title with its price."""

    title: str = Field("", description="Free-text listing title")
    price: float = Field(0.0, description="Purchase price, informational only")
    listing_id: Optional[str] = Field(
        None, description="Purchase identifier supplied by the caller"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "title": "2024 Topps Mike Trout Baseball Card #27",
                "price": 4.99,
                "listing_id": "purchase_123",
            }
        }


class DetectionResult(BaseModel):
    """Outcome of the "is this a sports card listing" check."""

    model_config = ConfigDict(frozen=True)

    is_card: bool = Field(False, description="Whether the title looks like a sports card")
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    reasons: List[str] = Field(default_factory=list)


class ExtractedCardData(BaseModel):
    """Structured fields parsed out of a listing title."""

    model_config = ConfigDict(frozen=True)

    year: Optional[int] = None
    player_name: Optional[str] = None
    brand: Optional[str] = None
    series: Optional[str] = None
    card_number: Optional[str] = None
    is_rookie: bool = False
    is_autograph: bool = False
    is_relic: bool = False
    sport: Optional[str] = None
    grade: Optional[float] = None
    grading_company: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """Year and player name are both known."""
        return bool(self.year and self.player_name)


class CandidatePlayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    team: Optional[str] = None

    @property
    def full_name(self) -> str:
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts)


class CandidateSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    year: Optional[int] = None
    set_name: Optional[str] = None
    color: Optional[str] = None


class CandidateCard(BaseModel):
    """A catalog record considered for matching."""

    model_config = ConfigDict(frozen=True)

    card_id: str
    card_number: Optional[str] = None
    print_run: Optional[int] = None
    is_rookie: bool = False
    series: CandidateSeries = Field(default_factory=CandidateSeries)
    players: List[CandidatePlayer] = Field(default_factory=list)

    @property
    def primary_player_name(self) -> Optional[str]:
        """Full name of the first listed player, if any."""
        if not self.players:
            return None
        return self.players[0].full_name or None

    @property
    def year(self) -> Optional[int]:
        return self.series.year


class ScoredCandidate(BaseModel):
    card: CandidateCard
    score: float = Field(..., ge=0.0, le=1.0)


class MatchOutcome(BaseModel):
    best_match: Optional[CandidateCard] = None
    confidence: float = 0.0
    alternatives: List[ScoredCandidate] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "MatchOutcome":
        return cls()


class PipelineResult(BaseModel):
    """Final result handed back to the purchase-processing caller."""

    is_card: bool = False
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    extracted_data: Optional[ExtractedCardData] = None
    matched_card: Optional[CandidateCard] = None
    alternatives: List[ScoredCandidate] = Field(default_factory=list)
    status: MatchStatus = MatchStatus.not_a_card
    reason: str = "No sports card keywords detected"
    detection_reasons: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "is_card": True,
                "confidence": 1.0,
                "extracted_data": {
                    "year": 2024,
                    "player_name": "Mike Trout",
                    "brand": "topps",
                    "card_number": "27",
                    "sport": "baseball",
                },
                "matched_card": {"card_id": "1001", "card_number": "27"},
                "status": "auto_add",
                "reason": "High confidence match found",
            }
        }
