"""Pydantic schemas for the persisted catalog snapshot.

Wire shape (camelCase keys, ISO-8601 datetimes):
  {"listings": [ListingRecord, ...], "favoriteIds": ["item_...", ...]}

Only user-authored listings are ever written; seed listings are rebuilt on
load. Datetimes come back as aware UTC datetimes, never raw strings.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaValidationError
from pydantic.alias_generators import to_camel

from src.mp_common.datetime_utils import ensure_utc
from src.mp_common.enums import ListingCategory, ListingCondition
from src.mp_common.errors import PersistenceError
from src.mp_listing.domain.models import CatalogSnapshot, Listing


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ListingRecord(_CamelModel):
    id: str
    title: str
    description: str
    price: int | float
    category: ListingCategory
    condition: ListingCondition
    images: list[str]
    location: str
    seller_id: str
    seller_name: str
    seller_avatar: str | None = None
    created_at: datetime
    updated_at: datetime
    is_sold: bool = False
    is_trade_only: bool = False
    trade_for: str | None = None
    views: int = 0
    likes: int = 0
    tags: list[str] = []
    is_premium: bool = False
    premium_expires_at: datetime | None = None

    @classmethod
    def from_domain(cls, listing: Listing) -> "ListingRecord":
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            price=listing.price,
            category=listing.category,
            condition=listing.condition,
            images=list(listing.images),
            location=listing.location,
            seller_id=listing.seller_id,
            seller_name=listing.seller_name,
            seller_avatar=listing.seller_avatar,
            created_at=listing.created_at,
            updated_at=listing.updated_at,
            is_sold=listing.is_sold,
            is_trade_only=listing.is_trade_only,
            trade_for=listing.trade_for,
            views=listing.views,
            likes=listing.likes,
            tags=list(listing.tags),
            is_premium=listing.is_premium,
            premium_expires_at=listing.premium_expires_at,
        )

    def to_domain(self) -> Listing:
        return Listing(
            id=self.id,
            title=self.title,
            description=self.description,
            price=self.price,
            category=self.category,
            condition=self.condition,
            images=list(self.images),
            location=self.location,
            seller_id=self.seller_id,
            seller_name=self.seller_name,
            seller_avatar=self.seller_avatar,
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            is_sold=self.is_sold,
            is_trade_only=self.is_trade_only,
            trade_for=self.trade_for,
            views=self.views,
            likes=self.likes,
            tags=list(self.tags),
            is_premium=self.is_premium,
            premium_expires_at=(
                ensure_utc(self.premium_expires_at) if self.premium_expires_at else None
            ),
        )


class SnapshotPayload(_CamelModel):
    listings: list[ListingRecord] = []
    favorite_ids: list[str] = []

    @classmethod
    def from_domain(cls, snapshot: CatalogSnapshot) -> "SnapshotPayload":
        return cls(
            listings=[ListingRecord.from_domain(lst) for lst in snapshot.listings],
            favorite_ids=list(snapshot.favorite_ids),
        )

    def to_domain(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            listings=[rec.to_domain() for rec in self.listings],
            favorite_ids=list(self.favorite_ids),
        )


def dump_snapshot(snapshot: CatalogSnapshot) -> str:
    return SnapshotPayload.from_domain(snapshot).model_dump_json(by_alias=True)


def load_snapshot(payload: str | bytes) -> CatalogSnapshot:
    """Parse a stored payload; malformed data raises PersistenceError."""
    try:
        return SnapshotPayload.model_validate_json(payload).to_domain()
    except SchemaValidationError as exc:
        raise PersistenceError(f"corrupt snapshot ({exc.error_count()} errors)") from exc
