"""InMemoryListingRepository — concrete implementation of ListingRepositoryProtocol.

Owns the authoritative id → Listing map for one catalog instance. Records
are replaced (copy-on-write) on every mutation, so a Listing handed to a
caller is never changed behind its back.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any

from src.mp_common.datetime_utils import Clock, utc_now
from src.mp_common.errors import NotFoundError, ValidationError
from src.mp_common.id_generator import generate_listing_id
from src.mp_listing.domain.favorites import FavoritesSet
from src.mp_listing.domain.models import CatalogSnapshot, Listing, ListingDraft
from src.mp_listing.domain.seed import generate_seed_listings, is_seed_seller
from src.mp_listing.domain.validation import (
    check_category,
    check_condition,
    check_description,
    check_images,
    check_location,
    check_price,
    check_tags,
    check_title,
    derive_tags,
)
from src.mp_premium.domain.lifecycle import PremiumLifecycle

logger = logging.getLogger(__name__)

# Fields callers may set through update(); everything else has a narrow mutator
# or is immutable.
_UPDATABLE_FIELDS = frozenset({
    "title",
    "description",
    "price",
    "category",
    "condition",
    "images",
    "location",
    "is_trade_only",
    "trade_for",
    "tags",
    "likes",
    "is_sold",
    "seller_name",
    "seller_avatar",
})
_IMMUTABLE_FIELDS = frozenset({"id", "seller_id", "created_at", "updated_at", "views"})


class InMemoryListingRepository:
    def __init__(
        self,
        clock: Clock = utc_now,
        favorites: FavoritesSet | None = None,
        premium: PremiumLifecycle | None = None,
    ) -> None:
        self._clock = clock
        self._favorites = favorites if favorites is not None else FavoritesSet()
        self._premium = premium or PremiumLifecycle(clock=clock)
        self._listings: dict[str, Listing] = {}

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, draft: ListingDraft, owner_id: str, owner_name: str) -> Listing:
        title = check_title(draft.title)
        description = check_description(draft.description)
        category = check_category(draft.category)
        condition = check_condition(draft.condition)
        images = check_images(draft.images)
        location = check_location(draft.location)
        is_trade_only = bool(draft.is_trade_only)
        price = check_price(draft.price, is_trade_only)
        tags = check_tags(draft.tags) or derive_tags(title)
        if not owner_id:
            raise ValidationError("seller_id", "owner id is required")
        if is_seed_seller(owner_id):
            raise ValidationError("seller_id", "reserved for demo listings")

        listing_id = generate_listing_id()
        while listing_id in self._listings:
            listing_id = generate_listing_id()

        now = self._clock()
        listing = Listing(
            id=listing_id,
            title=title,
            description=description,
            price=price,
            category=category,
            condition=condition,
            images=images,
            location=location,
            seller_id=owner_id,
            seller_name=owner_name or owner_id,
            created_at=now,
            updated_at=now,
            is_trade_only=is_trade_only,
            trade_for=draft.trade_for or None,
            tags=tags,
            is_premium=bool(draft.is_premium),
        )
        self._listings[listing.id] = listing
        logger.info("Listing created: id=%s seller=%s", listing.id, owner_id)
        return listing

    def update(self, listing_id: str, **fields: Any) -> Listing:
        current = self.get(listing_id)
        for name in fields:
            if name in _IMMUTABLE_FIELDS:
                raise ValidationError(name, "field cannot be updated")
            if name not in _UPDATABLE_FIELDS:
                raise ValidationError(name, "unknown or protected field")

        if current.is_sold and fields.get("is_sold") is False:
            raise ValidationError("is_sold", "a sold listing cannot be relisted")

        merged = replace(current, **fields)
        is_trade_only = bool(merged.is_trade_only)
        likes = merged.likes
        if isinstance(likes, bool) or not isinstance(likes, int) or likes < 0:
            raise ValidationError("likes", "must be a non-negative integer")

        updated = replace(
            merged,
            title=check_title(merged.title),
            description=check_description(merged.description),
            category=check_category(merged.category),
            condition=check_condition(merged.condition),
            images=check_images(merged.images),
            location=check_location(merged.location),
            is_trade_only=is_trade_only,
            price=check_price(merged.price, is_trade_only),
            tags=check_tags(merged.tags),
            is_sold=bool(merged.is_sold),
            updated_at=self._touch(current),
        )
        self._listings[listing_id] = updated
        return updated

    def delete(self, listing_id: str) -> None:
        if listing_id not in self._listings:
            raise NotFoundError(listing_id)
        del self._listings[listing_id]
        self._favorites.discard(listing_id)
        logger.info("Listing deleted: id=%s", listing_id)

    def increment_views(self, listing_id: str) -> Listing:
        current = self.get(listing_id)
        updated = replace(current, views=current.views + 1, updated_at=self._touch(current))
        self._listings[listing_id] = updated
        return updated

    def mark_sold(self, listing_id: str) -> Listing:
        current = self.get(listing_id)
        if current.is_sold:
            logger.info("Listing already sold, no-op: id=%s", listing_id)
            return current
        updated = replace(current, is_sold=True, updated_at=self._touch(current))
        self._listings[listing_id] = updated
        return updated

    def grant_premium(self, listing_id: str, duration_days: int) -> Listing:
        current = self.get(listing_id)
        granted_at = self._touch(current)
        expires_at = self._premium.grant(duration_days, now=granted_at)
        updated = replace(
            current,
            is_premium=True,
            premium_expires_at=expires_at,
            updated_at=granted_at,
        )
        self._listings[listing_id] = updated
        logger.info("Premium granted: id=%s expires_at=%s", listing_id, expires_at.isoformat())
        return updated

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def toggle_favorite(self, listing_id: str) -> bool:
        if listing_id not in self._listings:
            raise NotFoundError(listing_id)
        return self._favorites.toggle(listing_id)

    def is_favorite(self, listing_id: str) -> bool:
        return listing_id in self._favorites

    def favorite_ids(self) -> list[str]:
        return self._favorites.ids()

    def list_favorites(self) -> list[Listing]:
        return [self._listings[i] for i in self._favorites if i in self._listings]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, listing_id: str) -> Listing:
        listing = self._listings.get(listing_id)
        if listing is None:
            raise NotFoundError(listing_id)
        return listing

    def list_all(self) -> list[Listing]:
        return list(self._listings.values())

    def list_by_seller(self, owner_id: str) -> list[Listing]:
        return [lst for lst in self._listings.values() if lst.seller_id == owner_id]

    # ------------------------------------------------------------------
    # Snapshot merge
    # ------------------------------------------------------------------

    def load(self, snapshot: CatalogSnapshot | None) -> None:
        """effective catalog = persisted user listings ∪ freshly generated seed."""
        self._listings = merge_catalog(snapshot, generate_seed_listings(self._clock()))
        favorite_ids = snapshot.favorite_ids if snapshot is not None else []
        self._favorites.replace(i for i in favorite_ids if i in self._listings)
        logger.info(
            "Catalog loaded: %d listings (%d favorites)",
            len(self._listings),
            len(self._favorites),
        )

    def snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            listings=[
                lst for lst in self._listings.values() if not is_seed_seller(lst.seller_id)
            ],
            favorite_ids=self._favorites.ids(),
        )

    def _touch(self, listing: Listing) -> datetime:
        """Fresh updated_at that never moves backwards past created/updated."""
        return max(self._clock(), listing.updated_at, listing.created_at)


def merge_catalog(
    snapshot: CatalogSnapshot | None, seed: list[Listing]
) -> dict[str, Listing]:
    """Pure merge: persisted user-authored listings first, then the seed."""
    seed_ids = {lst.id for lst in seed}
    merged: dict[str, Listing] = {}
    for listing in snapshot.listings if snapshot is not None else []:
        if is_seed_seller(listing.seller_id):
            continue
        if listing.id in seed_ids or listing.id in merged:
            logger.warning("Dropping persisted listing with duplicate id=%s", listing.id)
            continue
        merged[listing.id] = listing
    for listing in seed:
        merged[listing.id] = listing
    return merged
