"""Null cache implementation for testing.

This cache always misses, so every request reaches the geocoder. Use it
in service tests that count upstream calls.

Example:
    service = ForwardGeocodingService(
        geocoder=fake_geocoder,
        cache=NullCache(),
        rate_limiter=limiter,
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class NullCache(Generic[T]):
    """No-op cache for testing - always misses.

    This cache implements the CachePort protocol but never actually
    caches anything.
    """

    name: str = "null"

    def lookup(self, key: str, now: Optional[float] = None) -> Optional[T]:
        """Always returns None (cache miss)."""
        return None

    def store(self, key: str, value: T, now: Optional[float] = None) -> None:
        """Does nothing."""
        pass

    def maybe_evict(self, now: Optional[float] = None) -> int:
        return 0

    def clear(self) -> int:
        return 0

    def invalidate(self, key: str) -> bool:
        return False

    def size(self) -> int:
        return 0

    def stats(self) -> Dict[str, int]:
        """Return empty stats.

        Returns:
            Dictionary with all zeros.
        """
        return {
            "size": 0,
            "hits": 0,
            "misses": 0,
            "evictions": 0,
            "hit_rate_percent": 0,
        }
