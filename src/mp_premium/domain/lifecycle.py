"""Premium boost time window.

A boost is active strictly while ``now < expires_at``. The stored
``is_premium`` flag on a listing is historical only; activity is always
recomputed from the expiry against the clock.
"""

from datetime import datetime, timedelta

from src.mp_common.datetime_utils import Clock, utc_now
from src.mp_common.errors import ValidationError

DEFAULT_BOOST_DAYS = 7

_SECONDS_PER_DAY = 86_400
_SECONDS_PER_HOUR = 3_600


class PremiumLifecycle:
    def __init__(
        self, clock: Clock = utc_now, default_duration_days: int = DEFAULT_BOOST_DAYS
    ) -> None:
        self._clock = clock
        self.default_duration_days = default_duration_days

    def now(self) -> datetime:
        return self._clock()

    def is_active(self, expires_at: datetime | None, now: datetime | None = None) -> bool:
        if expires_at is None:
            return False
        current = now if now is not None else self._clock()
        return current < expires_at

    def grant(self, duration_days: int | None = None, now: datetime | None = None) -> datetime:
        """Return the expiry of a boost granted at ``now``. Re-granting restarts the window."""
        days = self.default_duration_days if duration_days is None else duration_days
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise ValidationError("duration_days", "must be a positive whole number of days")
        current = now if now is not None else self._clock()
        return current + timedelta(days=days)

    def remaining_label(self, expires_at: datetime | None, now: datetime | None = None) -> str:
        """'3d 4h remaining', '5h remaining' or 'Expired'. Always floored."""
        current = now if now is not None else self._clock()
        if expires_at is None or not self.is_active(expires_at, current):
            return "Expired"

        remaining = int((expires_at - current).total_seconds())
        days = remaining // _SECONDS_PER_DAY
        hours = (remaining % _SECONDS_PER_DAY) // _SECONDS_PER_HOUR
        if days > 0:
            return f"{days}d {hours}h remaining"
        return f"{hours}h remaining"
