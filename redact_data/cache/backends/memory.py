"""
redact-data - Memory Cache Backend

In-memory cache implementation with LRU eviction and TTL support.
Safe for concurrent tasks within a single process.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any

from ...errors import CacheNotFoundError
from ..interface import Cacher, V

logger = logging.getLogger(__name__)


class MemoryCacher(Cacher[V]):
    """
    In-memory cache backend with LRU eviction.

    Features:
    - LRU eviction when max_size is reached
    - Per-key TTL support, resettable with expire()
    - asyncio.Lock around every mutation

    Values are held by reference; cache immutable values such as Data.
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: int = 60,
        namespace: str = "redact",
    ):
        """
        Initialize memory cache backend.

        Args:
            max_size: Maximum number of entries (LRU eviction when exceeded)
            default_ttl: Default TTL in seconds (0 = no expiry)
            namespace: Cache key namespace/prefix
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")

        self.max_size = max_size
        self.default_ttl = max(0, int(default_ttl))
        self.namespace = namespace

        # key -> (value, expiry_time)
        self._cache: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._evictions = 0

        self._lock = asyncio.Lock()

    def _make_key(self, key: str) -> str:
        """Create namespaced cache key."""
        return f"{self.namespace}:{key}"

    def _expiry(self, ttl: int | None) -> float | None:
        if ttl is None:
            ttl = self.default_ttl
        return time.monotonic() + ttl if ttl > 0 else None

    def _live_entry(self, cache_key: str) -> tuple[Any, float | None] | None:
        """Return the entry for cache_key, dropping it if expired. Caller holds the lock."""
        entry = self._cache.get(cache_key)
        if entry is None:
            return None

        _, expiry = entry
        if expiry is not None and time.monotonic() > expiry:
            del self._cache[cache_key]
            return None

        return entry

    def default_expiration_seconds(self) -> int:
        return self.default_ttl

    async def set(self, key: str, value: V, ttl: int | None = None) -> None:
        """Store value in cache."""
        async with self._lock:
            cache_key = self._make_key(key)

            if cache_key not in self._cache and len(self._cache) >= self.max_size:
                evicted_key, _ = self._cache.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted key from memory cache: %s", evicted_key)

            self._cache[cache_key] = (value, self._expiry(ttl))
            self._cache.move_to_end(cache_key)
            self._sets += 1

    async def get(self, key: str) -> V:
        """Retrieve value from cache."""
        async with self._lock:
            cache_key = self._make_key(key)
            entry = self._live_entry(cache_key)

            if entry is None:
                self._misses += 1
                raise CacheNotFoundError(key)

            self._cache.move_to_end(cache_key)
            self._hits += 1
            value: V = entry[0]
            return value

    async def exists(self, key: str) -> bool:
        """Check if key exists and is not expired."""
        async with self._lock:
            return self._live_entry(self._make_key(key)) is not None

    async def expire(self, key: str, seconds: int) -> bool:
        """Reset the TTL of an existing entry."""
        async with self._lock:
            cache_key = self._make_key(key)
            entry = self._live_entry(cache_key)

            if entry is None:
                return False

            # Non-positive TTL clears the expiry, as set(ttl=0) does
            expiry = self._expiry(seconds) if seconds > 0 else None
            self._cache[cache_key] = (entry[0], expiry)
            return True

    async def clear(self) -> None:
        """Clear all entries from cache."""
        async with self._lock:
            size = len(self._cache)
            self._cache.clear()
            logger.info("Cleared %d entries from memory cache namespace '%s'", size, self.namespace)

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        async with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

            return {
                "backend": "memory",
                "size": len(self._cache),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "sets": self._sets,
                "evictions": self._evictions,
                "namespace": self.namespace,
            }

    async def close(self) -> None:
        """Close cache and release resources."""
        logger.debug("Memory cache backend closed for namespace '%s'", self.namespace)
