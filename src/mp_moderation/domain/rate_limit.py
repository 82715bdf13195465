"""Sliding-window budget for external classifier calls.

Rules (defaults): 10 calls/minute, 100 calls/hour. A call that would exceed
either window is refused, and the policy treats the classifier as unavailable.
"""

from collections import deque
from datetime import datetime, timedelta

from src.mp_common.datetime_utils import Clock, utc_now

_MINUTE = timedelta(minutes=1)
_HOUR = timedelta(hours=1)


class CallRateLimiter:
    def __init__(
        self, per_minute: int = 10, per_hour: int = 100, clock: Clock = utc_now
    ) -> None:
        self._per_minute = per_minute
        self._per_hour = per_hour
        self._clock = clock
        self._calls: deque[datetime] = deque()

    def try_acquire(self) -> bool:
        now = self._clock()
        while self._calls and now - self._calls[0] >= _HOUR:
            self._calls.popleft()
        last_minute = sum(1 for ts in self._calls if now - ts < _MINUTE)
        if last_minute >= self._per_minute or len(self._calls) >= self._per_hour:
            return False
        self._calls.append(now)
        return True
