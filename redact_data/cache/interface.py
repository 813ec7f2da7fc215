"""
redact-data - Cache Interface

Defines the abstract interface that all cache backends must implement.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..data import Data

V = TypeVar("V")


class Cacher(ABC, Generic[V]):
    """
    Abstract base class for cache backends.

    Backends are parameterized by the type of value they hold: ``Cacher[Data]``
    for the data cache used by CachedDataStorer, ``Cacher[str]`` for plain
    string caching. Every operation must be safe to call from many
    concurrent tasks.

    Absence is signalled by CacheNotFoundError (get) or a False return
    (exists, expire); any transport or serialization failure raises
    CacheInternalError.
    """

    @abstractmethod
    async def set(self, key: str, value: V, ttl: int | None = None) -> None:
        """
        Store a value in the cache, overwriting any existing entry.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds (None = default expiration, 0 = no expiry)

        Raises:
            CacheInternalError: If the value could not be stored
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> V:
        """
        Retrieve a value from the cache.

        Args:
            key: Cache key

        Returns:
            The cached value

        Raises:
            CacheNotFoundError: If the key is absent or expired
            CacheInternalError: If the backend failed
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a key exists in the cache.

        Returns:
            True if key exists and is not expired, False otherwise

        Raises:
            CacheInternalError: If the backend failed
        """
        pass

    @abstractmethod
    async def expire(self, key: str, seconds: int) -> bool:
        """
        Reset the expiration of an existing entry.

        Args:
            key: Cache key
            seconds: New time-to-live in seconds (0 or less = no expiry)

        Returns:
            True if the TTL was reset, False if the key does not exist

        Raises:
            CacheInternalError: If the backend failed
        """
        pass

    @abstractmethod
    def default_expiration_seconds(self) -> int:
        """TTL applied when a caller does not give one explicitly."""
        pass

    async def close(self) -> None:
        """
        Close the cache backend and release resources.

        Should be called during graceful shutdown.
        """
        return None


DataCacher = Cacher[Data]
