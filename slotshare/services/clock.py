"""Timestamp source for availability records."""

import threading
import time
from collections.abc import Callable
from functools import lru_cache


class MonotonicClock:
    """Epoch-nanosecond clock whose readings strictly increase."""

    def __init__(self, source: Callable[[], int] = time.time_ns) -> None:
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._source(), self._last + 1)
            return self._last


@lru_cache
def get_clock() -> MonotonicClock:
    """Get the process-wide clock."""
    return MonotonicClock()
