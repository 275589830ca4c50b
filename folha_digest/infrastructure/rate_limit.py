"""In-memory request rate limiting for the manual trigger"""

import threading
import time
from collections import deque
from typing import Callable, Deque, Dict

from loguru import logger

RATE_LIMIT_MESSAGE = "Muitas requisições! Por favor, tente novamente mais tarde."


class RateLimiter:
    """
    Sliding window limiter: at most ``max_requests`` hits per key within
    ``window_seconds``.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    @property
    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def _prune(self, now: float) -> None:
        # drop expired timestamps; keys with nothing left in the window go away
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and now - hits[0] >= self.window_seconds:
                hits.popleft()
            if not hits:
                del self._hits[key]

    def hit(self, key: str) -> bool:
        """Record a request; False when ``key`` is over its limit."""
        now = self._clock()
        with self._lock:
            self._prune(now)
            hits = self._hits.setdefault(key, deque())
            if len(hits) >= self.max_requests:
                logger.warning(f"[RateLimit] Request from {key} rejected ({len(hits)} in window)")
                return False
            hits.append(now)
            return True

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
