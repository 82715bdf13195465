"""Demo catalog regenerated on every cold load.

Seed listings are never persisted; their sellers are reserved ids so a
snapshot can tell them apart from user-authored listings.
"""

from datetime import datetime, timedelta

from src.mp_common.enums import ListingCategory, ListingCondition
from src.mp_listing.domain.models import Listing

SEED_SELLER_IDS: frozenset[str] = frozenset(
    {"seller1", "seller2", "seller3", "seller4", "seller5"}
)

_IMG = "https://images.unsplash.com/photo-{}?w=400&h=300&fit=crop&crop=center"


def is_seed_seller(seller_id: str) -> bool:
    return seller_id in SEED_SELLER_IDS


def generate_seed_listings(now: datetime) -> list[Listing]:
    """Build the five demo listings with timestamps relative to ``now``."""

    def ago(days: int) -> datetime:
        return now - timedelta(days=days)

    return [
        Listing(
            id="1",
            title='Jeep Wrangler JK Lift Kit 4"',
            description=(
                "Complete 4 inch lift kit for Jeep Wrangler JK. Includes all hardware "
                "and installation instructions. Used for 6 months, excellent condition."
            ),
            price=850,
            category=ListingCategory.PARTS,
            condition=ListingCondition.EXCELLENT,
            images=[
                _IMG.format("1563013544-824ae1b704d3"),
                _IMG.format("1571068316344-75bc76f77890"),
                _IMG.format("1544636331-e26879cd4d9b"),
            ],
            location="San Diego, CA",
            seller_id="seller1",
            seller_name="Mike's Jeep Parts",
            created_at=ago(2),
            updated_at=ago(2),
            views=45,
            likes=8,
            tags=["jeep", "wrangler", "lift", "suspension"],
        ),
        Listing(
            id="2",
            title="2018 Ford F-150 Raptor",
            description=(
                "Low mileage Raptor with all the off-road goodies. Custom exhaust, LED "
                "light bars, and more. Garage kept, never been off-road."
            ),
            price=65000,
            category=ListingCategory.VEHICLES,
            condition=ListingCondition.EXCELLENT,
            images=[
                _IMG.format("1544636331-e26879cd4d9b"),
                _IMG.format("1609521263047-f8f205293f24"),
                _IMG.format("1552519507-da3b142c6e3d"),
                _IMG.format("1503376780353-7e6692767b70"),
            ],
            location="Escondido, CA",
            seller_id="seller2",
            seller_name="John Smith",
            created_at=ago(5),
            updated_at=ago(5),
            views=234,
            likes=42,
            tags=["ford", "raptor", "truck", "off-road"],
        ),
        Listing(
            id="3",
            title="BFGoodrich All-Terrain Tires 35x12.50R17",
            description=(
                "Set of 4 BFG All-Terrain tires. About 70% tread remaining. Great for "
                "daily driving and light off-roading."
            ),
            price=600,
            category=ListingCategory.TIRES,
            condition=ListingCondition.GOOD,
            images=[
                _IMG.format("1558618047-3c8c76ca7d13"),
                _IMG.format("1621135802920-133df287f89c"),
                _IMG.format("1609521263047-f8f205293f24"),
            ],
            location="Chula Vista, CA",
            seller_id="seller3",
            seller_name="Desert Wheels",
            created_at=ago(1),
            updated_at=ago(1),
            views=67,
            likes=12,
            tags=["tires", "bfgoodrich", "all-terrain", "35s"],
        ),
        Listing(
            id="4",
            title="Warn VR EVO 10 Winch",
            description=(
                "Brand new Warn VR EVO 10,000 lb winch. Never used, still in box. "
                "Will trade for camping gear or cash."
            ),
            price=950,
            category=ListingCategory.ACCESSORIES,
            condition=ListingCondition.NEW,
            images=[
                _IMG.format("1571019613454-1cb2f99b2d8b"),
                _IMG.format("1558618047-3c8c76ca7d13"),
            ],
            location="La Mesa, CA",
            seller_id="seller4",
            seller_name="Trail Gear Co",
            created_at=ago(3),
            updated_at=ago(3),
            trade_for="RTT or camping equipment",
            views=89,
            likes=15,
            tags=["winch", "warn", "recovery", "accessories"],
        ),
        Listing(
            id="5",
            title="Roof Top Tent - CVT Mt. Shasta",
            description=(
                "Awesome roof top tent for 2-3 people. Used on a few trips, great "
                "condition. Includes ladder and cover."
            ),
            price=0,
            category=ListingCategory.CAMPING,
            condition=ListingCondition.EXCELLENT,
            images=[
                _IMG.format("1504851149312-7a075b496cc7"),
                _IMG.format("1441974231531-c6227db76b6e"),
                _IMG.format("1533873984035-25970ab07461"),
            ],
            location="El Cajon, CA",
            seller_id="seller5",
            seller_name="Adventure Seeker",
            created_at=ago(4),
            updated_at=ago(4),
            is_trade_only=True,
            trade_for="Jeep parts or tools",
            views=123,
            likes=28,
            tags=["camping", "rtt", "roof-tent", "overlanding"],
        ),
    ]
