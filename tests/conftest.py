import os
import sys
from typing import List

import pytest

# Ensure the repository root is importable so the 'cardmatch' package can be resolved
THIS_DIR = os.path.dirname(__file__)
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from cardmatch.catalog import InMemoryCatalog  # noqa: E402
from cardmatch.models.card import (  # noqa: E402
    CandidateCard,
    CandidatePlayer,
    CandidateSeries,
)


def make_card(
    card_id: str,
    first_name: str = "Mike",
    last_name: str = "Trout",
    year: int = 2024,
    card_number=None,
    set_name: str = "2024 Series 1",
    series_name: str = "Base",
    is_rookie: bool = False,
) -> CandidateCard:
    players = []
    if first_name or last_name:
        players.append(
            CandidatePlayer(first_name=first_name, last_name=last_name, team="Angels")
        )
    return CandidateCard(
        card_id=card_id,
        card_number=card_number,
        is_rookie=is_rookie,
        series=CandidateSeries(name=series_name, year=year, set_name=set_name),
        players=players,
    )


class RecordingCatalog(InMemoryCatalog):
    """InMemoryCatalog that remembers every (year_range, limit) it was asked for."""

    def __init__(self, cards):
        super().__init__(cards)
        self.calls = []

    async def find_candidates(self, year_range, limit=50):
        self.calls.append((year_range, limit))
        return await super().find_candidates(year_range, limit)


class FailingCatalog:
    """Catalog whose every query fails."""

    def __init__(self):
        self.calls = 0

    async def find_candidates(self, year_range, limit=50):
        self.calls += 1
        raise ConnectionError("catalog unreachable")


class RecordingSink:
    """PurchaseSink that keeps every call in memory."""

    def __init__(self, fail_on_add: bool = False):
        self.fail_on_add = fail_on_add
        self.added: List[tuple] = []
        self.suggestions: List[tuple] = []
        self.statuses: List[tuple] = []

    async def add_to_collection(self, listing, card):
        if self.fail_on_add:
            raise RuntimeError("collection write failed")
        self.added.append((listing, card))

    async def queue_suggestion(self, listing, card, alternatives):
        self.suggestions.append((listing, card, alternatives))

    async def update_purchase_status(self, listing, status, details):
        self.statuses.append((listing, status, details))


@pytest.fixture
def trout_card() -> CandidateCard:
    # No card number, set name without the brand
    return make_card("1001")


@pytest.fixture
def trout_catalog(trout_card) -> RecordingCatalog:
    return RecordingCatalog([trout_card])


@pytest.fixture
def failing_catalog() -> FailingCatalog:
    return FailingCatalog()


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
