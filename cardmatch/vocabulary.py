"""
Keyword tables used by the detector and the extractor.

Every table is a frozen pydantic model, so a detector or extractor can be built
with an alternate vocabulary in tests without patching module state.

Ordering matters: sport groups, brands and series are scanned in the order
listed here and the first hit wins.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class KeywordGroup(BaseModel):
    """A labelled set of keywords with the weight it contributes on a hit."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Name reported when the group matches")
    terms: Tuple[str, ...] = Field(..., description="Lower-case terms, any one is a hit")
    weight: float = Field(0.0, description="Confidence added when the group matches", ge=0)

    def matches(self, text_lower: str) -> bool:
        return any(term in text_lower for term in self.terms)


class DetectionVocabulary(BaseModel):
    """Weighted keyword tables and bonuses for card-ness detection."""

    model_config = ConfigDict(frozen=True)

    # At most one sport group is credited per title.
    sport_groups: Tuple[KeywordGroup, ...]
    # Card indicator groups are additive.
    card_groups: Tuple[KeywordGroup, ...]
    year_bonus: float = 0.15
    card_number_bonus: float = 0.1
    grading_bonus: float = 0.1
    card_threshold: float = 0.4


class ExtractionVocabulary(BaseModel):
    """Literal lists scanned by the extractor."""

    model_config = ConfigDict(frozen=True)

    brands: Tuple[str, ...]
    series: Tuple[str, ...]
    sport_groups: Tuple[KeywordGroup, ...]
    player_name_exclusions: Tuple[str, ...]


DEFAULT_DETECTION_VOCABULARY = DetectionVocabulary(
    sport_groups=(
        KeywordGroup(label="baseball", terms=("baseball", "mlb"), weight=0.3),
        KeywordGroup(label="basketball", terms=("basketball", "nba"), weight=0.3),
        KeywordGroup(label="football", terms=("football", "nfl"), weight=0.3),
        KeywordGroup(label="hockey", terms=("hockey", "nhl"), weight=0.3),
        KeywordGroup(label="soccer", terms=("soccer",), weight=0.25),
    ),
    card_groups=(
        KeywordGroup(label="rookie", terms=("rookie", "rc"), weight=0.4),
        KeywordGroup(label="autograph", terms=("autograph", "auto", "signed"), weight=0.35),
        KeywordGroup(label="patch", terms=("patch", "jersey", "relic"), weight=0.35),
        KeywordGroup(label="refractor", terms=("refractor", "parallel", "chrome"), weight=0.3),
        KeywordGroup(label="prizm", terms=("prizm", "optic", "select"), weight=0.3),
        KeywordGroup(
            label="topps", terms=("topps", "panini", "upper deck", "bowman"), weight=0.35
        ),
        KeywordGroup(label="card", terms=("card",), weight=0.2),
    ),
)

DEFAULT_EXTRACTION_VOCABULARY = ExtractionVocabulary(
    brands=(
        "topps",
        "panini",
        "upper deck",
        "bowman",
        "donruss",
        "fleer",
        "score",
        "leaf",
        "prizm",
        "optic",
        "select",
        "contenders",
        "chronicles",
    ),
    series=(
        "chrome",
        "heritage",
        "stadium club",
        "fire",
        "mosaic",
        "immaculate",
        "national treasures",
        "flawless",
        "noir",
        "the cup",
        "genesis",
    ),
    sport_groups=(
        KeywordGroup(label="baseball", terms=("baseball", "mlb")),
        KeywordGroup(label="basketball", terms=("basketball", "nba")),
        KeywordGroup(label="football", terms=("football", "nfl")),
        KeywordGroup(label="hockey", terms=("hockey", "nhl")),
        KeywordGroup(label="soccer", terms=("soccer", "mls")),
    ),
    # Two-word phrases that look like a name but are card jargon.
    player_name_exclusions=(
        "upper deck",
        "trading card",
        "rookie card",
        "base card",
        "insert card",
        "chrome refractor",
        "gold parallel",
        "silver prizm",
        "red refractor",
        "blue parallel",
        "green wave",
        "black gold",
    ),
)
