"""Per-provider fixed-window request admission.

Each provider owns an independent window. The limiter is an admission test,
not a scheduler: it never blocks, queues, or retries.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable

from ..logging import get_logger
from ..types import Provider

logger = get_logger(__name__)

WINDOW_SECONDS = 60.0


@dataclass
class RateLimitWindow:
    """Request counter for one provider's current window."""
    limit: int
    reset_at: float
    request_count: int = 0


class RateLimiter:
    """Fixed-window request counter with independent state per provider.

    Windows reset lazily: the first check after ``reset_at`` has passed zeroes
    the count and opens a new window before the check is evaluated.
    """

    def __init__(
        self,
        limits: dict[Provider, int],
        window_seconds: float = WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the limiter.

        Args:
            limits: Requests allowed per window, keyed by provider
            window_seconds: Window length in seconds
            clock: Time source returning epoch seconds (injectable for tests)
        """
        for provider, limit in limits.items():
            if limit <= 0:
                raise ValueError(f"rate limit for {provider.value} must be positive, got {limit}")

        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        now = clock()
        self._windows = {
            provider: RateLimitWindow(limit=limit, reset_at=now + window_seconds)
            for provider, limit in limits.items()
        }

    def check_and_reserve(self, provider: Provider) -> bool:
        """Reserve one request slot for the provider if quota remains.

        A denied check leaves the window untouched, so it never consumes quota.

        Args:
            provider: A configured provider

        Returns:
            True if the request is admitted (and counted), False otherwise

        Raises:
            KeyError: If the provider has no configured window
        """
        with self._lock:
            window = self._windows[provider]
            now = self._clock()
            if now > window.reset_at:
                window.request_count = 0
                window.reset_at = now + self.window_seconds

            if window.request_count < window.limit:
                window.request_count += 1
                return True

        logger.info(f"{provider.value} rate limit reached ({window.limit} per window)")
        return False

    def retry_after(self, provider: Provider) -> float:
        """Seconds until the provider's current window resets."""
        with self._lock:
            return max(0.0, self._windows[provider].reset_at - self._clock())

    def snapshot(self) -> dict[str, dict[str, float | int]]:
        """Current window state for every provider."""
        with self._lock:
            return {
                provider.value: {
                    "requests": window.request_count,
                    "reset_at": window.reset_at,
                    "limit": window.limit,
                }
                for provider, window in self._windows.items()
            }
