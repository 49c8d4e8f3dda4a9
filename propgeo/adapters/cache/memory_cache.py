"""Thread-safe in-memory TTL cache.

Entries live for the process lifetime only. Expired entries are reported
as misses but stay in the map until the next sweep, which runs after a
store once the map holds more than ``sweep_threshold`` entries.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from ...domain.models import CacheEntry

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_SWEEP_THRESHOLD = 1000


@dataclass
class InMemoryCache(Generic[T]):
    """Thread-safe in-memory cache with a fixed TTL and amortized sweep.

    This cache implements the CachePort protocol and is injected into
    the geocoding services, one instance per direction.

    Attributes:
        ttl_seconds: How long an entry stays valid after it is stored
        sweep_threshold: Size above which a store triggers the sweep
        name: Cache name for logging
        clock: Time source, seconds since the epoch

    Example:
        cache = InMemoryCache[GeocodeResult](name="geocode")
        cache.store("belgrano 123", result)
        cache.lookup("belgrano 123")
    """

    ttl_seconds: float = DEFAULT_TTL_SECONDS
    sweep_threshold: int = DEFAULT_SWEEP_THRESHOLD
    name: str = "cache"
    clock: Callable[[], float] = field(default=time.time, repr=False)

    _store: Dict[str, CacheEntry] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)
    _evictions: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _now(self, now: Optional[float]) -> float:
        return self.clock() if now is None else now

    def is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return entry.age(now) < self.ttl_seconds

    def lookup(self, key: str, now: Optional[float] = None) -> Optional[T]:
        """Get a value from the cache.

        Expired entries count as misses but are not deleted here.

        Args:
            key: The cache key.
            now: Current time, defaults to the cache clock.

        Returns:
            The cached value, or None if not found or expired.
        """
        now = self._now(now)
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None

            if not self.is_fresh(entry, now):
                self._logger.debug("Cache entry expired", extra={"key": key})
                self._misses += 1
                return None

            self._hits += 1
            return entry.value

    def store(self, key: str, value: T, now: Optional[float] = None) -> None:
        """Set a value in the cache, overwriting any previous entry.

        Args:
            key: The cache key.
            value: The value to cache.
            now: Storage time, defaults to the cache clock.
        """
        now = self._now(now)
        with self._lock:
            self._store[key] = CacheEntry(key=key, value=value, stored_at=now)
            self._logger.debug("Cache entry set", extra={"key": key})
            self.maybe_evict(now)

    def maybe_evict(self, now: Optional[float] = None) -> int:
        """Drop every expired entry once the cache is over its threshold.

        Returns:
            Number of entries removed (0 when under the threshold).
        """
        now = self._now(now)
        with self._lock:
            if len(self._store) <= self.sweep_threshold:
                return 0

            stale = [
                key
                for key, entry in self._store.items()
                if not self.is_fresh(entry, now)
            ]
            for key in stale:
                del self._store[key]

            self._evictions += len(stale)
            self._logger.debug(
                "Cache sweep",
                extra={"evicted": len(stale), "remaining": len(self._store)},
            )
            return len(stale)

    def entry(self, key: str) -> Optional[CacheEntry]:
        """Return the raw entry for a key, expired or not."""
        with self._lock:
            return self._store.get(key)

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry.

        Returns:
            True if the key existed and was removed.
        """
        with self._lock:
            if key in self._store:
                del self._store[key]
                self._logger.debug("Cache entry invalidated", extra={"key": key})
                return True
            return False

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return cache statistics.

        Returns:
            Dictionary with hit/miss/eviction counts and size.
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "hit_rate_percent": round(hit_rate, 1),
            }

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._store.keys())
