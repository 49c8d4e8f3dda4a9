"""Rate limiter port - Minimum spacing between outbound calls."""

from __future__ import annotations

from typing import Optional, Protocol


class RateLimiterPort(Protocol):
    """Port for rate limiting calls to the geocoding service.

    Implementation: adapters/rate_limit/min_interval.py
    """

    def wait(self, now: Optional[float] = None) -> bool:
        """Block until the next call is allowed, then record it.

        Args:
            now: Current time in seconds, defaults to the limiter clock.

        Returns:
            True if the caller had to wait, False otherwise.
        """
        ...
