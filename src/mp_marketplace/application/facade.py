"""MarketplaceFacade — single entry point for UI callers.

Commands mutate the repository synchronously, then persist a snapshot.
A failed save raises PersistenceError carrying the command result; the
in-memory mutation is kept (durability is best-effort).

Queries go through the query engine; moderated queries run an explicit
batch moderation first and annotate each listing with its verdict.
"""

import logging
from datetime import datetime
from typing import Any, TypeVar

from src.mp_common.errors import NotAuthenticatedError, PersistenceError
from src.mp_listing.application.schemas import dump_snapshot, load_snapshot
from src.mp_listing.domain.models import CatalogSnapshot, Listing, ListingDraft
from src.mp_listing.domain.repository import (
    ListingRepositoryProtocol,
    SnapshotStoreProtocol,
)
from src.mp_marketplace.application.schemas import ListingView
from src.mp_marketplace.domain.identity import Identity, IdentityProviderProtocol
from src.mp_moderation.application.service import ModerationService
from src.mp_moderation.domain.models import Verdict
from src.mp_premium.domain.lifecycle import PremiumLifecycle
from src.mp_query.domain.engine import query_listings
from src.mp_query.domain.models import FilterSpec

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MarketplaceFacade:
    def __init__(
        self,
        repository: ListingRepositoryProtocol,
        store: SnapshotStoreProtocol,
        identity: IdentityProviderProtocol,
        *,
        moderation: ModerationService | None = None,
        premium: PremiumLifecycle | None = None,
    ) -> None:
        self._repo = repository
        self._store = store
        self._identity = identity
        self._moderation = moderation
        self._premium = premium or PremiumLifecycle()
        self._filters = FilterSpec()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Rehydrate: persisted user listings ∪ fresh seed. Load failures fall back to seed."""
        snapshot: CatalogSnapshot | None = None
        try:
            payload = await self._store.load()
            if payload:
                snapshot = load_snapshot(payload)
        except PersistenceError as exc:
            logger.warning("Snapshot load failed, starting from seed data: %s", exc.message)
        self._repo.load(snapshot)

    async def aclose(self) -> None:
        """Release the moderation classifier client, if any."""
        if self._moderation is not None:
            await self._moderation.aclose()

    async def _persist(self, result: T) -> T:
        try:
            await self._store.save(dump_snapshot(self._repo.snapshot()))
        except PersistenceError as exc:
            logger.error("Snapshot save failed; in-memory change kept: %s", exc.message)
            exc.result = result
            raise
        return result

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _require_user(self) -> Identity:
        user = self._identity.current_user()
        if user is None:
            raise NotAuthenticatedError()
        return user

    async def create_listing(self, draft: ListingDraft) -> Listing:
        user = self._require_user()
        listing = self._repo.create(draft, user.id, user.seller_name)
        return await self._persist(listing)

    async def update_listing(self, listing_id: str, **fields: Any) -> Listing:
        listing = self._repo.update(listing_id, **fields)
        return await self._persist(listing)

    async def delete_listing(self, listing_id: str) -> None:
        self._repo.delete(listing_id)
        if self._moderation is not None:
            self._moderation.forget(listing_id)
        await self._persist(None)

    async def toggle_favorite(self, listing_id: str) -> bool:
        is_favorite = self._repo.toggle_favorite(listing_id)
        return await self._persist(is_favorite)

    async def mark_sold(self, listing_id: str) -> Listing:
        listing = self._repo.mark_sold(listing_id)
        return await self._persist(listing)

    async def increment_views(self, listing_id: str) -> Listing:
        listing = self._repo.increment_views(listing_id)
        return await self._persist(listing)

    async def grant_premium(self, listing_id: str, duration_days: int | None = None) -> Listing:
        days = self._premium.default_duration_days if duration_days is None else duration_days
        listing = self._repo.grant_premium(listing_id, days)
        return await self._persist(listing)

    # ------------------------------------------------------------------
    # Session filters
    # ------------------------------------------------------------------

    @property
    def filters(self) -> FilterSpec:
        return self._filters

    def set_filters(self, spec: FilterSpec) -> None:
        self._filters = spec

    def clear_filters(self) -> None:
        self._filters = FilterSpec()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(self, spec: FilterSpec | None = None) -> list[Listing]:
        """Browsable feed using the session filters unless ``spec`` is given.

        Listings with a cached inappropriate verdict are excluded.
        """
        lookup = self._moderation.cached_verdicts() if self._moderation is not None else None
        return query_listings(
            self._repo.list_all(),
            spec or self._filters,
            lookup,
            now=self._premium.now(),
            premium=self._premium,
        )

    async def query_moderated(self, spec: FilterSpec | None = None) -> list[ListingView]:
        spec = spec or self._filters
        now = self._premium.now()
        candidates = query_listings(
            self._repo.list_all(), spec, now=now, premium=self._premium
        )
        verdicts: dict[str, Verdict] = {}
        if self._moderation is not None:
            verdicts = await self._moderation.moderate_batch(candidates)
        visible = query_listings(candidates, spec, verdicts, now=now, premium=self._premium)
        return [self._view(listing, now, verdicts.get(listing.id)) for listing in visible]

    def get_listing(self, listing_id: str) -> Listing:
        return self._repo.get(listing_id)

    async def get_listing_view(self, listing_id: str) -> ListingView:
        """Detail view; flagged content is replaced by an under-review placeholder."""
        listing = self._repo.get(listing_id)
        now = self._premium.now()
        verdict: Verdict | None = None
        if self._moderation is not None:
            verdict = (await self._moderation.moderate_batch([listing])).get(listing.id)
        view = self._view(listing, now, verdict)
        if verdict is not None and not verdict.is_appropriate and self._moderation is not None:
            fallback = self._moderation.policy.fallback_image_for(listing.category)
            return view.redacted(fallback)
        return view

    def list_user_listings(self, owner_id: str | None = None) -> list[Listing]:
        if owner_id is None:
            owner_id = self._require_user().id
        return self._repo.list_by_seller(owner_id)

    def list_favorites(self) -> list[Listing]:
        return self._repo.list_favorites()

    def is_favorite(self, listing_id: str) -> bool:
        return self._repo.is_favorite(listing_id)

    def is_premium_active(self, listing_id: str) -> bool:
        return self._premium.is_active(self._repo.get(listing_id).premium_expires_at)

    def premium_label(self, listing_id: str) -> str:
        return self._premium.remaining_label(self._repo.get(listing_id).premium_expires_at)

    def _view(self, listing: Listing, now: datetime, verdict: Verdict | None) -> ListingView:
        return ListingView.from_domain(
            listing,
            self._premium,
            now=now,
            is_favorite=self._repo.is_favorite(listing.id),
            verdict=verdict,
        )
