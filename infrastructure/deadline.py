"""One monotonic deadline shared by every phase of a run."""

import time
from collections.abc import Callable


class Deadline:
    """Absolute expiry on a monotonic clock; phases ask for the time left."""

    def __init__(self, timeout_s: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.timeout_s = float(timeout_s)
        self._expires_at = clock() + self.timeout_s

    def remaining(self) -> float:
        """Seconds left, never negative."""
        return max(0.0, self._expires_at - self._clock())

    def remaining_ms(self) -> int:
        return int(self.remaining() * 1000)

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0
