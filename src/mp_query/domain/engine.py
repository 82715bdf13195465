"""Browsable feed derivation.

Pipeline, in order:
  1. drop sold listings
  2. AND every present filter
  3. stable sort: active premium first, then created_at descending
  4. drop listings whose known verdict is inappropriate

Pure given its inputs and ``now``; input listings are never mutated.
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime

from src.mp_common.datetime_utils import utc_now
from src.mp_listing.domain.models import Listing
from src.mp_moderation.domain.models import Verdict
from src.mp_premium.domain.lifecycle import PremiumLifecycle
from src.mp_query.domain.models import FilterSpec

Predicate = Callable[[Listing], bool]


def _matches_search(listing: Listing, query: str) -> bool:
    return (
        query in listing.title.lower()
        or query in listing.description.lower()
        or any(query in tag.lower() for tag in listing.tags)
    )


def build_predicates(spec: FilterSpec) -> list[Predicate]:
    predicates: list[Predicate] = []
    if spec.category is not None:
        predicates.append(lambda lst: lst.category == spec.category)
    if spec.condition is not None:
        predicates.append(lambda lst: lst.condition == spec.condition)
    if spec.min_price is not None:
        predicates.append(lambda lst: lst.price >= spec.min_price)  # type: ignore[operator]
    if spec.max_price is not None:
        predicates.append(lambda lst: lst.price <= spec.max_price)  # type: ignore[operator]
    if spec.trade_only:
        predicates.append(lambda lst: lst.is_trade_only)
    if spec.search_query:
        query = spec.search_query.lower()
        predicates.append(lambda lst: _matches_search(lst, query))
    if spec.location:
        location = spec.location.lower()
        predicates.append(lambda lst: location in lst.location.lower())
    return predicates


def query_listings(
    listings: Iterable[Listing],
    spec: FilterSpec | None = None,
    moderation_lookup: Mapping[str, Verdict] | None = None,
    now: datetime | None = None,
    premium: PremiumLifecycle | None = None,
) -> list[Listing]:
    spec = spec or FilterSpec()
    premium = premium or PremiumLifecycle()
    now = now if now is not None else utc_now()
    predicates = build_predicates(spec)

    visible = [
        lst for lst in listings
        if not lst.is_sold and all(pred(lst) for pred in predicates)
    ]

    # Two passes of a stable sort: newest first, then premium partition on top.
    # Equal keys keep input order.
    visible.sort(key=lambda lst: lst.created_at, reverse=True)
    visible.sort(key=lambda lst: not premium.is_active(lst.premium_expires_at, now))

    if moderation_lookup is not None:
        visible = [
            lst for lst in visible
            if (verdict := moderation_lookup.get(lst.id)) is None or verdict.is_appropriate
        ]
    return visible
