"""
redact-data - Cached Data Storer

Cache-aside façade over one DataStorer and one Data cacher.

Reads:
- cache hit: the entry's TTL is slid forward to the cache's default
  expiration and the cached Data is returned. A confirmed hit is trusted;
  the backing store is not consulted.
- cache miss: the Data is read from the store, written to the cache, and
  returned.

Writes go to the store first and only then to the cache, so a failed
store write never leaves a cache entry behind.

Consistency caveat: there is no locking and no reconciliation. Two
concurrent create() calls on one path may interleave their store and cache
halves, leaving the cache holding either writer's value. Because hits are
trusted and refreshed on every read, that entry is served until it is
rewritten or left unread long enough to expire.
"""

import logging

from ..cache.interface import Cacher
from ..data import Data, DataCollection, DataPath
from ..errors import (
    CacheError,
    CacheOriginError,
    StorageError,
    StorageNotFoundError,
    StorageOriginError,
)
from .interface import DataStorer

logger = logging.getLogger(__name__)


class CachedDataStorer(DataStorer):
    """
    DataStorer that keeps a cache warm in front of a backing store.

    Every failure is raised as CacheOriginError or StorageOriginError, each
    wrapping the underlying CacheError/StorageError as ``source``. No
    retries are performed.
    """

    def __init__(
        self,
        storer: DataStorer,
        cacher: Cacher[Data],
        owns_backends: bool = False,
    ) -> None:
        """
        Args:
            storer: Backing store, already constructed
            cacher: Data cache, already constructed
            owns_backends: If True, close() also closes storer and cacher
        """
        self.storer = storer
        self.cacher = cacher
        self._owns_backends = owns_backends

    async def get(self, path: str | DataPath) -> Data:
        key = str(DataPath.of(path))

        try:
            if await self.cacher.exists(key):
                # Sliding expiration: every hit extends freshness
                await self.cacher.expire(key, self.cacher.default_expiration_seconds())
                cached = await self.cacher.get(key)
                logger.debug("Cache hit", extra={"path": key})
                return cached
        except CacheError as e:
            raise CacheOriginError(e) from e

        logger.debug("Cache miss", extra={"path": key})

        try:
            data = await self.storer.get(key)
        except StorageNotFoundError as e:
            logger.debug("No data stored", extra={"path": key})
            raise StorageOriginError(e) from e
        except StorageError as e:
            raise StorageOriginError(e) from e

        try:
            await self.cacher.set(key, data, self.cacher.default_expiration_seconds())
        except CacheError as e:
            raise CacheOriginError(e) from e

        return data

    async def get_collection(self, path: str | DataPath, skip: int, page_size: int) -> DataCollection:
        """Pages are not cached; read straight from the backing store."""
        try:
            return await self.storer.get_collection(path, skip, page_size)
        except StorageError as e:
            raise StorageOriginError(e) from e

    async def create(self, data: Data) -> bool:
        try:
            created = await self.storer.create(data)
        except StorageError as e:
            raise StorageOriginError(e) from e

        # The record is durable from here on; a cache failure below leaves
        # the cache possibly stale but never loses the write.
        try:
            await self.cacher.set(data.key, data, self.cacher.default_expiration_seconds())
        except CacheError as e:
            logger.warning(
                "Data stored but cache write failed",
                extra={"path": data.key, "error": str(e)},
            )
            raise CacheOriginError(e) from e

        return created

    async def close(self) -> None:
        """Close the wrapped backends when this storer owns them."""
        if not self._owns_backends:
            return

        await self.cacher.close()
        await self.storer.close()
