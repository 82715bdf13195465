"""Price helpers for listings.

Prices are plain dollar amounts (non-negative numbers). A trade-only
listing always carries price 0.
"""

import math


def is_valid_price(price: object) -> bool:
    """True for finite, non-negative real numbers (bool excluded)."""
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    return math.isfinite(price) and price >= 0


def format_price(price: float, is_trade_only: bool = False) -> str:
    """Render a price for display: 850 -> '$850', 1234.5 -> '$1,234.50'."""
    if is_trade_only:
        return "Trade Only"
    if float(price).is_integer():
        return f"${int(price):,}"
    return f"${price:,.2f}"
