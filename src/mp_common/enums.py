"""Global enums — values match the persisted snapshot format exactly."""

from enum import Enum


class ListingCategory(str, Enum):
    VEHICLES = "vehicles"
    PARTS = "parts"
    ACCESSORIES = "accessories"
    GEAR = "gear"
    TOOLS = "tools"
    TIRES = "tires"
    CAMPING = "camping"
    ELECTRONICS = "electronics"
    OTHER = "other"


class ListingCondition(str, Enum):
    NEW = "new"
    LIKE_NEW = "like_new"
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    FOR_PARTS = "for_parts"


class VerdictCategory(str, Enum):
    """Moderation outcome tag. Only SAFE is appropriate."""
    SAFE = "safe"
    INAPPROPRIATE = "inappropriate"
    EXPLICIT = "explicit"
    VIOLENT = "violent"
    SPAM = "spam"


class SnapshotBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"
