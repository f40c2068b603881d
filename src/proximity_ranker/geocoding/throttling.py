"""
Pacing implementations for controlling request rates.

The geocoding service asks single clients to stay at or below one
request per second, so the ranking loop pauses for a fixed delay after
every resolution instead of bursting through a token bucket.
"""

from __future__ import annotations

import time
import logging
from typing import Callable

from .base import RateLimiter

logger = logging.getLogger(__name__)


class FixedDelayPacer(RateLimiter):
    """
    Fixed inter-request delay.

    ``wait()`` always sleeps for the full delay. Callers invoke it after
    each lookup (or cascade), so N lookups take at least N * delay seconds.
    """

    def __init__(self, delay_s: float = 1.1, sleep: Callable[[float], None] = time.sleep):
        """
        Initialize pacer.

        Args:
            delay_s: Seconds to pause per call (must be >= 0)
            sleep: Sleep function, replaceable in tests
        """
        if delay_s < 0:
            raise ValueError("delay_s must be >= 0")

        self.delay_s = float(delay_s)
        self._sleep = sleep
        self.calls = 0

    def wait(self) -> None:
        """Block for the configured delay."""
        self.calls += 1
        if self.delay_s > 0:
            logger.debug(f"Pacing {self.delay_s:.2f}s")
            self._sleep(self.delay_s)


class NoOpRateLimiter(RateLimiter):
    """
    Rate limiter that does nothing (for testing/development).

    Useful when you want to disable pacing without changing code.
    """

    def wait(self) -> None:
        """Do nothing."""
        pass
