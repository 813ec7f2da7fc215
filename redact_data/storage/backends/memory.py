"""
redact-data - Memory Storage Backend

In-process DataStorer for tests and local development. Nothing is persisted
across process restarts.
"""

import asyncio
import logging

from ...data import Data, DataCollection, DataPath
from ...errors import StorageNotFoundError
from ..interface import DataStorer, check_page

logger = logging.getLogger(__name__)


class MemoryDataStorer(DataStorer):
    """DataStorer keeping every Data in a dict keyed by normalized path."""

    def __init__(self) -> None:
        self._records: dict[str, Data] = {}
        self._lock = asyncio.Lock()

    async def get(self, path: str | DataPath) -> Data:
        key = str(DataPath.of(path))
        async with self._lock:
            data = self._records.get(key)

        if data is None:
            raise StorageNotFoundError(key)
        return data

    async def get_collection(self, path: str | DataPath, skip: int, page_size: int) -> DataCollection:
        check_page(skip, page_size)
        prefix = str(DataPath.of(path))

        async with self._lock:
            matching = sorted(k for k in self._records if k.startswith(prefix))
            page = [self._records[k] for k in matching[skip : skip + page_size]]

        return DataCollection(data=page)

    async def create(self, data: Data) -> bool:
        async with self._lock:
            self._records[data.key] = data

        logger.debug("Stored data in memory", extra={"path": data.key})
        return True

    def __len__(self) -> int:
        return len(self._records)
