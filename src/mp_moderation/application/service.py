"""ModerationService — explicit, awaitable batch moderation.

Listings are classified concurrently (bounded by a semaphore) and results
reassembled by listing id, not completion order. A listing whose
classification fails is left out of the result and keeps its
pre-moderation state. Nothing is ever written back to the repository.

Verdicts are cached per listing and reused until the listing's
``updated_at`` changes.
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime

from src.mp_listing.domain.models import Listing
from src.mp_moderation.domain.models import Verdict
from src.mp_moderation.domain.policy import ModerationPolicy

logger = logging.getLogger(__name__)


class ModerationService:
    def __init__(self, policy: ModerationPolicy, concurrency: int = 8) -> None:
        self._policy = policy
        self._concurrency = max(1, concurrency)
        self._cache: dict[str, tuple[datetime, Verdict]] = {}

    @property
    def policy(self) -> ModerationPolicy:
        return self._policy

    async def moderate_listing(self, listing: Listing) -> Verdict:
        cached = self._cache.get(listing.id)
        if cached is not None and cached[0] == listing.updated_at:
            return cached[1]

        verdict = await self._policy.classify_listing(listing)
        self._cache[listing.id] = (listing.updated_at, verdict)
        if not verdict.is_appropriate:
            logger.warning("Listing %s flagged for moderation: %s", listing.id, list(verdict.reasons))
        return verdict

    async def moderate_batch(self, listings: Iterable[Listing]) -> dict[str, Verdict]:
        batch = list(listings)
        semaphore = asyncio.Semaphore(self._concurrency)

        async def _bounded(listing: Listing) -> Verdict:
            async with semaphore:
                return await self.moderate_listing(listing)

        results = await asyncio.gather(
            *(_bounded(listing) for listing in batch), return_exceptions=True
        )

        verdicts: dict[str, Verdict] = {}
        for listing, result in zip(batch, results):
            if isinstance(result, Exception):
                logger.error("Moderation failed for listing %s: %r", listing.id, result)
                continue
            if isinstance(result, BaseException):
                raise result
            verdicts[listing.id] = result
        return verdicts

    def cached_verdicts(self) -> dict[str, Verdict]:
        """Most recent verdict per listing id."""
        return {listing_id: verdict for listing_id, (_, verdict) in self._cache.items()}

    def forget(self, listing_id: str) -> None:
        self._cache.pop(listing_id, None)

    async def aclose(self) -> None:
        self._cache.clear()
        await self._policy.aclose()
