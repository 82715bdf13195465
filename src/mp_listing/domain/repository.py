# src/mp_listing/domain/repository.py
"""Repository and snapshot-store Protocols — dependency inversion for testability.

Unit tests inject fakes that conform to these Protocols.
Infrastructure layer provides the real implementations.
"""

from typing import Any, Protocol

from src.mp_listing.domain.models import CatalogSnapshot, Listing, ListingDraft


class ListingRepositoryProtocol(Protocol):
    def create(self, draft: ListingDraft, owner_id: str, owner_name: str) -> Listing: ...

    def update(self, listing_id: str, **fields: Any) -> Listing: ...

    def delete(self, listing_id: str) -> None: ...

    def increment_views(self, listing_id: str) -> Listing: ...

    def mark_sold(self, listing_id: str) -> Listing: ...

    def grant_premium(self, listing_id: str, duration_days: int) -> Listing: ...

    def get(self, listing_id: str) -> Listing: ...

    def list_all(self) -> list[Listing]: ...

    def list_by_seller(self, owner_id: str) -> list[Listing]: ...

    def toggle_favorite(self, listing_id: str) -> bool: ...

    def is_favorite(self, listing_id: str) -> bool: ...

    def favorite_ids(self) -> list[str]: ...

    def list_favorites(self) -> list[Listing]: ...

    def load(self, snapshot: CatalogSnapshot | None) -> None: ...

    def snapshot(self) -> CatalogSnapshot: ...


class SnapshotStoreProtocol(Protocol):
    """Durable key-value slot holding one serialized CatalogSnapshot.

    Implementations raise PersistenceError on backend failure.
    """

    async def load(self) -> str | None: ...

    async def save(self, payload: str) -> None: ...
