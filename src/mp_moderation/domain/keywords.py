"""Curated moderation tables for a family-friendly off-road marketplace."""

BLOCKED_KEYWORDS: tuple[str, ...] = (
    "nude", "naked", "nsfw", "adult", "porn", "sex", "explicit",
    "bikini", "lingerie", "underwear", "topless", "bare",
    "violence", "weapon", "gun", "knife", "blood", "gore",
    "drug", "marijuana", "cocaine", "pills", "smoking",
    "hate", "racist", "nazi", "offensive",
)

SAFE_KEYWORDS: tuple[str, ...] = (
    "jeep", "truck", "suv", "tire", "wheel", "engine", "part",
    "camping", "tent", "gear", "tool", "winch", "bumper",
    "lift", "suspension", "light", "bar", "roof", "rack",
    "off-road", "vehicle", "automotive", "outdoor",
)

TRUSTED_IMAGE_DOMAINS: tuple[str, ...] = (
    "images.unsplash.com",
    "via.placeholder.com",
    "picsum.photos",
    "source.unsplash.com",
)

# Device-local references a remote classifier cannot fetch.
LOCAL_URI_PREFIXES: tuple[str, ...] = (
    "file://",
    "content://",
    "assets-library://",
    "ph://",
    "data:image",
)

_FALLBACK = "https://images.unsplash.com/photo-{}?w=400&h=300&fit=crop"

FALLBACK_IMAGES: dict[str, str] = {
    "vehicles": _FALLBACK.format("1544636331-e26879cd4d9b"),
    "parts": _FALLBACK.format("1558618047-3c8c76ca7d13"),
    "tires": _FALLBACK.format("1558618047-3c8c76ca7d13"),
    "accessories": _FALLBACK.format("1558618666-fcd25c85cd64"),
    "gear": _FALLBACK.format("1441974231531-c6227db76b6e"),
    "camping": _FALLBACK.format("1504851149312-7a075b496cc7"),
    "default": _FALLBACK.format("1544636331-e26879cd4d9b"),
}

CLASSIFIER_PROMPT = (
    'Analyze this image description for content moderation in a family-friendly '
    'off-road marketplace: "{description}".\n\n'
    "Is this appropriate for a marketplace selling vehicles, parts, tires, camping "
    "gear, and off-road accessories?\n"
    'Respond with only "APPROPRIATE" or "INAPPROPRIATE" followed by a brief reason.'
)
