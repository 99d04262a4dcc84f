"""In-process implementation of the RateLimiter interface."""

import threading
import time
from collections import OrderedDict, deque
from collections.abc import Callable

from transcipio_common.logging import setup_logging

from infrastructure.interfaces import RateLimiter

logger = setup_logging()


class InMemoryRateLimiter(RateLimiter):
    """
    Sliding-window limiter for a single process.

    Each client key maps to the timestamps of its requests inside the
    trailing window. Keys are kept in least-recently-seen order so the map
    can be capped at ``max_keys``; idle keys are also swept every
    ``prune_interval`` checks.
    """

    def __init__(
        self,
        window_seconds: float,
        max_requests: int,
        max_keys: int = 10_000,
        prune_interval: int = 1_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._window_seconds = window_seconds
        self._max_requests = max_requests
        self._max_keys = max_keys
        self._prune_interval = prune_interval
        self._clock = clock
        self._entries: OrderedDict[str, deque[float]] = OrderedDict()
        self._lock = threading.Lock()
        self._checks = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def is_rate_limited(self, client_key: str) -> bool:
        if not client_key:
            return False

        with self._lock:
            now = self._clock()
            window_start = now - self._window_seconds

            timestamps = self._entries.get(client_key)
            if timestamps is None:
                timestamps = deque()
                self._entries[client_key] = timestamps
            else:
                self._entries.move_to_end(client_key)

            while timestamps and timestamps[0] <= window_start:
                timestamps.popleft()
            timestamps.append(now)
            count = len(timestamps)

            self._checks += 1
            if self._checks % self._prune_interval == 0:
                self._prune(window_start)
            while len(self._entries) > self._max_keys:
                self._entries.popitem(last=False)

        limited = count > self._max_requests
        if limited:
            logger.info(
                "Rate limit exceeded",
                extra={"client_key": client_key, "count": count},
            )
        return limited

    def _prune(self, window_start: float) -> None:
        """Drops keys whose newest request has left the window."""
        idle = [key for key, ts in self._entries.items() if ts[-1] <= window_start]
        for key in idle:
            del self._entries[key]
        if idle:
            logger.info("Pruned idle rate limit keys", extra={"pruned": len(idle)})

    def close(self) -> None:
        with self._lock:
            self._entries.clear()
