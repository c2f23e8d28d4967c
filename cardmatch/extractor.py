"""
Structured field extraction from listing titles.

Every field is best effort and independent of the others, except the player
name, whose first heuristic uses the extracted year and brand. Missing fields
stay None; nothing here raises for an unrecognised title.

Two fields are resolved by ordered cascades where the first success wins:

    card number   #27  ->  card 27  ->  no. 27  ->  27/99
    player name   <year> <brand> <Name>  ->  <Name> <year>
                  ->  <year> <word> <word> <Name>  ->  any two capitalised words

Reordering either cascade changes extraction results.
"""

import re
from typing import Callable, Optional, Pattern, Tuple

from cardmatch.models.card import ExtractedCardData
from cardmatch.utils.logger import extractor_logger
from cardmatch.vocabulary import DEFAULT_EXTRACTION_VOCABULARY, ExtractionVocabulary

YEAR_PATTERN = re.compile(r"\b(19[5-9]\d|20[0-3]\d)\b")

CARD_NUMBER_PATTERNS: Tuple[Pattern, ...] = (
    re.compile(r"#(\d+)"),
    re.compile(r"card\s+(\d+)", re.IGNORECASE),
    re.compile(r"no\.?\s*(\d+)", re.IGNORECASE),
    re.compile(r"\b(\d+)/\d+\b"),
)

ROOKIE_PATTERN = re.compile(r"\b(rookie|rc)\b", re.IGNORECASE)
AUTOGRAPH_PATTERN = re.compile(r"\b(auto|autograph|signed)\b", re.IGNORECASE)
RELIC_PATTERN = re.compile(r"\b(relic|patch|jersey|game.?used)\b", re.IGNORECASE)
GRADING_PATTERN = re.compile(r"\b(psa|bgs|sgc)\s+(\d+(?:\.\d+)?)", re.IGNORECASE)

NAME = r"([A-Z][a-z]+\s+[A-Z][a-z]+)"

# A cascade step receives (title, year, brand) and returns a match or None.
NameStep = Callable[[str, Optional[int], Optional[str]], Optional[re.Match]]


def _year_brand_name(title: str, year: Optional[int], brand: Optional[str]):
    # "2024 Topps Mike Trout Baseball Card"
    if not year or not brand:
        return None
    pattern = rf"{year}\s+{re.escape(brand)}\s+{NAME}"
    return re.search(pattern, title, re.IGNORECASE)


def _leading_name_year(title: str, year: Optional[int], brand: Optional[str]):
    # "Mike Trout 2024 Topps"
    return re.search(rf"^{NAME}\s+\d{{4}}", title, re.IGNORECASE)


def _name_after_year_and_two_words(title: str, year: Optional[int], brand: Optional[str]):
    # "2024 Panini Prizm LeBron James"
    return re.search(rf"\d{{4}}\s+\w+\s+\w+\s+{NAME}", title, re.IGNORECASE)


def _two_capitalized_words(title: str, year: Optional[int], brand: Optional[str]):
    return re.search(rf"\b{NAME}\b", title)


PLAYER_NAME_CASCADE: Tuple[NameStep, ...] = (
    _year_brand_name,
    _leading_name_year,
    _name_after_year_and_two_words,
    _two_capitalized_words,
)


class CardDataExtractor:
    """Parses year, brand, series, number, player, flags, sport and grading."""

    def __init__(self, vocabulary: Optional[ExtractionVocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_EXTRACTION_VOCABULARY

    def extract(self, title: str) -> ExtractedCardData:
        if not title:
            return ExtractedCardData()

        title_lower = title.lower()
        year = self._extract_year(title)
        brand = self._first_literal(title_lower, self.vocabulary.brands)
        grading_company, grade = self._extract_grading(title)

        data = ExtractedCardData(
            year=year,
            player_name=self.extract_player_name(title, year, brand),
            brand=brand,
            series=self._first_literal(title_lower, self.vocabulary.series),
            card_number=self._extract_card_number(title),
            is_rookie=bool(ROOKIE_PATTERN.search(title)),
            is_autograph=bool(AUTOGRAPH_PATTERN.search(title)),
            is_relic=bool(RELIC_PATTERN.search(title)),
            sport=self._extract_sport(title_lower),
            grade=grade,
            grading_company=grading_company,
        )
        extractor_logger.debug(f'extract "{title}" -> {data.model_dump(exclude_none=True)}')
        return data

    def extract_player_name(
        self, title: str, year: Optional[int], brand: Optional[str]
    ) -> Optional[str]:
        """Run the player name cascade, skipping matches that are card jargon."""
        exclusions = self.vocabulary.player_name_exclusions
        for step in PLAYER_NAME_CASCADE:
            match = step(title, year, brand)
            if not match:
                continue
            name = match.group(1).strip()
            name_lower = name.lower()
            if any(excluded in name_lower for excluded in exclusions):
                continue
            return name
        return None

    def _extract_year(self, title: str) -> Optional[int]:
        match = YEAR_PATTERN.search(title)
        return int(match.group(1)) if match else None

    def _extract_card_number(self, title: str) -> Optional[str]:
        for pattern in CARD_NUMBER_PATTERNS:
            match = pattern.search(title)
            if match:
                return match.group(1)
        return None

    def _extract_sport(self, title_lower: str) -> Optional[str]:
        for group in self.vocabulary.sport_groups:
            if group.matches(title_lower):
                return group.label
        return None

    def _extract_grading(self, title: str) -> Tuple[Optional[str], Optional[float]]:
        match = GRADING_PATTERN.search(title)
        if not match:
            return None, None
        return match.group(1).upper(), float(match.group(2))

    @staticmethod
    def _first_literal(title_lower: str, candidates: Tuple[str, ...]) -> Optional[str]:
        """First candidate, in priority order, contained in the title."""
        for candidate in candidates:
            if candidate in title_lower:
                return candidate
        return None


def extract_card_data(title: str) -> ExtractedCardData:
    """Extract with the default vocabulary."""
    return CardDataExtractor().extract(title)
