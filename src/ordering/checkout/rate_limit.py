"""Per-client request rate limiting for order submission.

Each key (a client network identifier) keeps the instants of its accepted
requests within the trailing window. A request is rejected, and not
recorded, once the key already has ``max_requests`` instants in the window.

One ``RateLimiter`` is built per process and shared by all requests; the
application keeps it on ``app.state``. Tests build their own with a fake
clock.
"""

import threading
import time
from collections import deque
from collections.abc import Callable

import structlog

from ordering.exceptions import RateLimitedError

logger = structlog.get_logger(__name__)


class RateLimiter:
    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 60 * 60,
        clock: Callable[[], float] = time.monotonic,
        max_keys: int | None = 10_000,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_keys = max_keys
        self._clock = clock
        self._requests: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "RateLimiter":
        return cls(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            max_keys=settings.rate_limit_max_keys,
        )

    def _purge(self, instants: deque[float], now: float) -> None:
        while instants and now - instants[0] >= self.window_seconds:
            instants.popleft()

    def _sweep(self, now: float) -> None:
        for key in list(self._requests):
            instants = self._requests[key]
            self._purge(instants, now)
            if not instants:
                del self._requests[key]

    def check(self, key: str) -> bool:
        """Record a request for ``key`` if it is within the limit.

        Returns ``False``, without recording, when the key is over the limit.
        """
        with self._lock:
            now = self._clock()
            instants = self._requests.get(key)
            if instants is None:
                if self.max_keys is not None and len(self._requests) >= self.max_keys:
                    self._sweep(now)
                instants = self._requests[key] = deque()

            self._purge(instants, now)
            if len(instants) >= self.max_requests:
                return False

            instants.append(now)
            return True

    def hit(self, key: str) -> None:
        """Like ``check`` but raises ``RateLimitedError`` on rejection."""
        if not self.check(key):
            logger.warning("Rate limit exceeded", client=key)
            raise RateLimitedError()

    def remaining(self, key: str) -> int:
        with self._lock:
            instants = self._requests.get(key)
            if not instants:
                return self.max_requests
            self._purge(instants, self._clock())
            return max(self.max_requests - len(instants), 0)

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._requests.clear()
            else:
                self._requests.pop(key, None)

    def __len__(self) -> int:
        return len(self._requests)
