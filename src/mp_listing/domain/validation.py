"""Listing field rules.

Each check raises ValidationError naming the offending field. The only
silent normalization is trade-only forcing price to 0.
"""

from src.mp_common.enums import ListingCategory, ListingCondition
from src.mp_common.errors import ValidationError
from src.mp_common.prices import is_valid_price

MAX_TITLE_LENGTH = 80
MIN_IMAGES = 1
MAX_IMAGES = 5
MIN_TAG_WORD_LENGTH = 3


def check_title(title: object) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title", "Please enter a title for your item.")
    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError("title", f"must be at most {MAX_TITLE_LENGTH} characters")
    return title


def check_description(description: object) -> str:
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("description", "Please enter a description.")
    return description.strip()


def check_location(location: object) -> str:
    if not isinstance(location, str) or not location.strip():
        raise ValidationError("location", "Please enter your location.")
    return location.strip()


def check_category(category: object) -> ListingCategory:
    try:
        return ListingCategory(category)
    except ValueError:
        raise ValidationError("category", "Please select a category.") from None


def check_condition(condition: object) -> ListingCondition:
    try:
        return ListingCondition(condition)
    except ValueError:
        raise ValidationError("condition", "Please select the item condition.") from None


def check_images(images: object) -> list[str]:
    if not isinstance(images, (list, tuple)) or len(images) < MIN_IMAGES:
        raise ValidationError("images", "Please add at least one photo.")
    if len(images) > MAX_IMAGES:
        raise ValidationError("images", f"at most {MAX_IMAGES} photos are allowed")
    if any(not isinstance(ref, str) or not ref.strip() for ref in images):
        raise ValidationError("images", "image references must be non-empty strings")
    return [ref.strip() for ref in images]


def check_price(price: object, is_trade_only: bool) -> float:
    """Return the stored price: 0 when trade-only, else a positive amount."""
    if is_trade_only:
        return 0
    if not is_valid_price(price) or price <= 0:  # type: ignore[operator]
        raise ValidationError("price", "Please enter a valid price or select trade only.")
    return price  # type: ignore[return-value]


def check_tags(tags: object) -> list[str]:
    if not isinstance(tags, (list, tuple)) or any(not isinstance(t, str) for t in tags):
        raise ValidationError("tags", "tags must be a list of strings")
    return [t.strip() for t in tags if t.strip()]


def derive_tags(title: str) -> list[str]:
    """Lower-cased title words longer than two characters."""
    return [word for word in title.lower().split() if len(word) >= MIN_TAG_WORD_LENGTH]
