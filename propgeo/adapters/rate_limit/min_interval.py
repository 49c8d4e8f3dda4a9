"""Minimum-interval rate limiter.

Guarantees a minimum spacing between consecutive upstream calls, the way
the public Nominatim usage policy asks for (one request per second). This
is not a token bucket: after an idle period the next call goes out at
once.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class MinIntervalRateLimiter:
    """Blocks callers so that calls are at least ``min_interval_seconds`` apart.

    The lock is held across the sleep, so concurrent callers are released
    one at a time. The call time is stamped after the wait, right before
    the caller issues its request.

    Attributes:
        min_interval_seconds: Minimum spacing between calls
        name: Limiter name for logging
        clock: Time source in seconds
        sleep: Blocking sleep function
    """

    min_interval_seconds: float = 1.0
    name: str = "rate_limiter"
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    _last_request_time: Optional[float] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    def last_request_time(self) -> Optional[float]:
        return self._last_request_time

    def wait(self, now: Optional[float] = None) -> bool:
        """Wait until the next call is allowed and record it.

        Args:
            now: Current time, defaults to the limiter clock. When given,
                the call is stamped at ``now`` plus any time slept.

        Returns:
            True if a delay was applied.
        """
        with self._lock:
            if now is None:
                now = self.clock()

            delayed = False
            if self._last_request_time is not None:
                elapsed = now - self._last_request_time
                remaining = self.min_interval_seconds - elapsed
                if remaining > 0:
                    self._logger.debug(
                        "Rate limit wait",
                        extra={"limiter": self.name, "delay_seconds": remaining},
                    )
                    self.sleep(remaining)
                    now += remaining
                    delayed = True

            self._last_request_time = now
            return delayed

    def reset(self) -> None:
        with self._lock:
            self._last_request_time = None
