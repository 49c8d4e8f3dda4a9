"""Cache port - Injectable caching abstraction.

Each geocoding direction owns one cache instance; nothing is kept in
module globals.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for time-aware caching.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - Production
    - adapters/cache/null_cache.py (NullCache) - Testing

    Every method that depends on time takes an optional ``now`` (POSIX
    seconds) so callers and tests can pin the clock.
    """

    def lookup(self, key: str, now: Optional[float] = None) -> Optional[T]:
        """Get a value from the cache.

        Args:
            key: The cache key.
            now: Current time, defaults to the cache clock.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    def store(self, key: str, value: T, now: Optional[float] = None) -> None:
        """Store a value, then run the eviction sweep if the cache is full.

        Args:
            key: The cache key.
            value: The value to cache.
            now: Time to record as the entry's storage time.
        """
        ...

    def maybe_evict(self, now: Optional[float] = None) -> int:
        """Remove expired entries once the cache grows past its threshold.

        Returns:
            Number of entries removed.
        """
        ...

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        ...

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        ...

    def size(self) -> int:
        """Return the number of entries in the cache."""
        ...

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss counters and size."""
        ...
