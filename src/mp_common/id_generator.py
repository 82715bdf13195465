"""Listing id generation.

Ids look like ``item_<base36 ms timestamp><6 random chars>``, e.g.
``item_mgxk4d2p7fq0ab``. The timestamp prefix keeps ids roughly in
creation order; the suffix separates listings created in the same
millisecond. Callers that keep an id index still check for collisions.
"""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 6


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    digits = []
    while True:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
        if value == 0:
            break
    return "".join(reversed(digits))


def generate_listing_id(timestamp_ms: int | None = None) -> str:
    ms = int(time.time() * 1000) if timestamp_ms is None else timestamp_ms
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"item_{to_base36(ms)}{suffix}"
