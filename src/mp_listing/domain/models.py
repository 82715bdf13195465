"""Domain models for mp_listing — pure dataclasses, no persistence dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.mp_common.enums import ListingCategory, ListingCondition


@dataclass
class Listing:
    id: str
    title: str
    description: str
    price: float                     # dollars; forced to 0 when trade-only
    category: ListingCategory
    condition: ListingCondition
    images: list[str]                # 1-5 refs, first is the cover
    location: str
    seller_id: str
    seller_name: str                 # denormalized display copy
    created_at: datetime
    updated_at: datetime
    is_sold: bool = False
    is_trade_only: bool = False
    trade_for: str | None = None
    views: int = 0
    likes: int = 0
    tags: list[str] = field(default_factory=list)
    is_premium: bool = False         # historical; see PremiumLifecycle.is_active
    premium_expires_at: datetime | None = None
    seller_avatar: str | None = None


@dataclass
class ListingDraft:
    """Create-listing command payload, validated by the repository."""

    title: str
    description: str
    price: float
    category: ListingCategory | str
    condition: ListingCondition | str
    images: list[str]
    location: str
    is_trade_only: bool = False
    trade_for: str | None = None
    tags: list[str] = field(default_factory=list)
    is_premium: bool = False


@dataclass
class CatalogSnapshot:
    """Durable subset of catalog state: user-authored listings + favorites."""

    listings: list[Listing] = field(default_factory=list)
    favorite_ids: list[str] = field(default_factory=list)
