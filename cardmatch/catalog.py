"""
Card catalog access.

The matcher only depends on the `CatalogQuery` protocol: given an optional
inclusive year range, return at most `limit` candidate cards with their
series, set and player metadata joined in.
"""

import asyncio
from typing import Any, Iterable, List, Optional, Protocol, Tuple

from cardmatch.config import DEFAULT_CANDIDATE_LIMIT
from cardmatch.models.card import CandidateCard, CandidatePlayer, CandidateSeries
from cardmatch.utils.logger import catalog_logger

YearRange = Tuple[int, int]

CARD_TABLE = "card"
CARD_SELECT = (
    "card_id, card_number, print_run, is_rookie, "
    "series!inner(name, color(name), set!inner(name, year)), "
    "card_player_team(player_team(player(first_name, last_name), team(name)))"
)
SET_YEAR_COLUMN = "series.set.year"


class CatalogQueryError(Exception):
    """The catalog could not be queried."""


class CatalogQuery(Protocol):
    async def find_candidates(
        self, year_range: Optional[YearRange], limit: int = DEFAULT_CANDIDATE_LIMIT
    ) -> List[CandidateCard]: ...


def _first(value: Any) -> dict:
    """Embedded relations come back as either an object or a one-item list."""
    if isinstance(value, list):
        return value[0] if value and isinstance(value[0], dict) else {}
    return value if isinstance(value, dict) else {}


def _to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def candidate_from_row(row: dict) -> CandidateCard:
    """Map a joined catalog row to a CandidateCard, tolerating missing relations."""
    series = _first(row.get("series"))
    card_set = _first(series.get("set"))
    color = _first(series.get("color"))

    players = []
    for link in row.get("card_player_team") or []:
        player_team = _first(link.get("player_team") if isinstance(link, dict) else None)
        player = _first(player_team.get("player"))
        if not player:
            continue
        team = _first(player_team.get("team"))
        players.append(
            CandidatePlayer(
                first_name=player.get("first_name"),
                last_name=player.get("last_name"),
                team=team.get("name"),
            )
        )

    card_number = row.get("card_number")
    return CandidateCard(
        card_id=str(row.get("card_id")),
        card_number=str(card_number) if card_number not in (None, "") else None,
        print_run=_to_int(row.get("print_run")),
        is_rookie=bool(row.get("is_rookie")),
        series=CandidateSeries(
            name=series.get("name"),
            year=_to_int(card_set.get("year")),
            set_name=card_set.get("name"),
            color=color.get("name"),
        ),
        players=players,
    )


class SupabaseCatalog:
    """Catalog backed by the Supabase `card` table and its joined relations."""

    def __init__(self, client=None):
        self._client = client

    def _get_client(self):
        if self._client is None:
            from cardmatch.utils.supabase import get_supabase

            try:
                self._client = get_supabase()
            except Exception as e:
                raise CatalogQueryError(f"Supabase client unavailable: {e}") from e
        return self._client

    def _fetch_rows(self, year_range: Optional[YearRange], limit: int) -> List[dict]:
        query = self._get_client().table(CARD_TABLE).select(CARD_SELECT)
        if year_range:
            low, high = year_range
            query = query.gte(SET_YEAR_COLUMN, low).lte(SET_YEAR_COLUMN, high)
        try:
            res = query.limit(limit).execute()
        except Exception as e:
            raise CatalogQueryError(f"Catalog query failed: {e}") from e
        return list(getattr(res, "data", []) or [])

    async def find_candidates(
        self, year_range: Optional[YearRange], limit: int = DEFAULT_CANDIDATE_LIMIT
    ) -> List[CandidateCard]:
        # The Supabase client is synchronous
        loop = asyncio.get_running_loop()
        rows = await loop.run_in_executor(None, self._fetch_rows, year_range, limit)

        candidates = [candidate_from_row(row) for row in rows[:limit]]
        catalog_logger.debug(
            f"📚 fetched {len(candidates)} candidates for year range {year_range}"
        )
        return candidates


class InMemoryCatalog:
    """List-backed catalog with the same year filter and cap as the database."""

    def __init__(self, cards: Iterable[CandidateCard]):
        self.cards = list(cards)

    async def find_candidates(
        self, year_range: Optional[YearRange], limit: int = DEFAULT_CANDIDATE_LIMIT
    ) -> List[CandidateCard]:
        if year_range is None:
            return self.cards[:limit]

        low, high = year_range
        matching = [
            card for card in self.cards if card.year is not None and low <= card.year <= high
        ]
        return matching[:limit]
