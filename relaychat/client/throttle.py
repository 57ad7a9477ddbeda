"""Minimum-interval gate for outgoing chat requests."""

import math
import time
from collections.abc import Callable


class Throttle:
    """Admit at most one dispatch per interval.

    A depth-one limiter: a call is admitted only if the interval has passed
    since the last admitted call. Rejected calls leave the timestamp alone.

    Attributes:
        interval_ms: Minimum milliseconds between admitted calls.
        last_call_at: Clock reading of the last admitted call.
    """

    def __init__(self, interval_ms: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.interval_ms = interval_ms
        self.last_call_at: float | None = None
        self._clock = clock

    def remaining(self) -> float:
        """Seconds until the next call would be admitted."""
        if self.interval_ms <= 0 or self.last_call_at is None:
            return 0.0
        elapsed = self._clock() - self.last_call_at
        return max(0.0, self.interval_ms / 1000 - elapsed)

    def acquire(self) -> int | None:
        """Try to admit a call.

        Returns:
            None if admitted (and the timestamp is updated), otherwise the
            whole number of seconds to wait, at least 1.
        """
        if self.interval_ms <= 0:
            return None
        wait = self.remaining()
        if wait > 0:
            return max(1, math.ceil(wait))
        self.last_call_at = self._clock()
        return None

    def reset(self) -> None:
        self.last_call_at = None
