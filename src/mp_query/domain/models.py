"""Query inputs — ephemeral, never persisted with catalog state."""

from dataclasses import dataclass

from src.mp_common.enums import ListingCategory, ListingCondition


@dataclass(frozen=True)
class FilterSpec:
    category: ListingCategory | None = None
    condition: ListingCondition | None = None
    min_price: float | None = None
    max_price: float | None = None
    trade_only: bool = False
    search_query: str | None = None
    location: str | None = None
