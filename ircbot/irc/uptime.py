"""Session uptime clock."""

from __future__ import annotations

import time
from collections.abc import Callable


class UptimeClock:
    """Monotonic start stamp taken once; read-only afterwards."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: float | None = None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    @property
    def started(self) -> bool:
        return self._started_at is not None

    def elapsed(self) -> float:
        """Seconds since ``start``; 0.0 before the session has started."""
        if self._started_at is None:
            return 0.0
        return max(0.0, self._clock() - self._started_at)
