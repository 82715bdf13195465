"""Pydantic view models handed to the UI layer."""

from datetime import datetime

from pydantic import BaseModel

from src.mp_common.enums import ListingCategory, ListingCondition, VerdictCategory
from src.mp_common.prices import format_price
from src.mp_listing.domain.models import Listing
from src.mp_moderation.domain.models import Verdict
from src.mp_premium.domain.lifecycle import PremiumLifecycle

UNDER_REVIEW_TITLE = "[Content Under Review]"
UNDER_REVIEW_DESCRIPTION = "This item is currently under content review."
UNDER_REVIEW_TAG = "under-review"


class VerdictOut(BaseModel):
    category: VerdictCategory
    is_appropriate: bool
    confidence: float
    reasons: list[str]

    @classmethod
    def from_domain(cls, verdict: Verdict) -> "VerdictOut":
        return cls(
            category=verdict.category,
            is_appropriate=verdict.is_appropriate,
            confidence=verdict.confidence,
            reasons=list(verdict.reasons),
        )


class ListingView(BaseModel):
    id: str
    title: str
    description: str
    price: float
    price_display: str
    category: ListingCategory
    condition: ListingCondition
    images: list[str]
    location: str
    tags: list[str]
    seller_id: str
    seller_name: str
    views: int
    likes: int
    is_sold: bool
    is_trade_only: bool
    trade_for: str | None
    premium_active: bool
    premium_label: str
    premium_expires_at: datetime | None
    is_favorite: bool = False
    created_at: datetime
    updated_at: datetime
    verdict: VerdictOut | None = None

    @classmethod
    def from_domain(
        cls,
        listing: Listing,
        premium: PremiumLifecycle,
        *,
        now: datetime,
        is_favorite: bool = False,
        verdict: Verdict | None = None,
    ) -> "ListingView":
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            price=listing.price,
            price_display=format_price(listing.price, listing.is_trade_only),
            category=listing.category,
            condition=listing.condition,
            images=list(listing.images),
            location=listing.location,
            tags=list(listing.tags),
            seller_id=listing.seller_id,
            seller_name=listing.seller_name,
            views=listing.views,
            likes=listing.likes,
            is_sold=listing.is_sold,
            is_trade_only=listing.is_trade_only,
            trade_for=listing.trade_for,
            premium_active=premium.is_active(listing.premium_expires_at, now),
            premium_label=premium.remaining_label(listing.premium_expires_at, now),
            premium_expires_at=listing.premium_expires_at,
            is_favorite=is_favorite,
            created_at=listing.created_at,
            updated_at=listing.updated_at,
            verdict=VerdictOut.from_domain(verdict) if verdict is not None else None,
        )

    def redacted(self, fallback_image: str) -> "ListingView":
        """Placeholder copy shown while flagged content awaits review."""
        return self.model_copy(
            update={
                "title": UNDER_REVIEW_TITLE,
                "description": UNDER_REVIEW_DESCRIPTION,
                "images": [fallback_image for _ in self.images],
                "tags": [UNDER_REVIEW_TAG],
            }
        )
