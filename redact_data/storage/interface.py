"""
redact-data - Storage Interface

Defines the abstract interface that all durable data stores must implement.
"""

from abc import ABC, abstractmethod

from ..data import Data, DataCollection, DataPath


class DataStorer(ABC):
    """
    Abstract base class for backing stores of Data.

    Implementations translate their native errors into StorageNotFoundError
    or StorageInternalError, and every operation must be safe to call from
    many concurrent tasks sharing one instance.
    """

    @abstractmethod
    async def get(self, path: str | DataPath) -> Data:
        """
        Fetch the Data stored at a path.

        Args:
            path: Dotted path; normalized before lookup

        Returns:
            The stored Data

        Raises:
            StorageNotFoundError: If nothing is stored at the path
            StorageInternalError: If the backend failed
        """
        pass

    @abstractmethod
    async def get_collection(self, path: str | DataPath, skip: int, page_size: int) -> DataCollection:
        """
        Fetch a page of Data stored at or under a path prefix, ordered by path.

        Args:
            path: Dotted path prefix; normalized before lookup
            skip: Number of matching records to skip
            page_size: Maximum number of records to return

        Returns:
            The page, empty when nothing matches

        Raises:
            ValueError: If skip or page_size is negative
            StorageInternalError: If the backend failed
        """
        pass

    @abstractmethod
    async def create(self, data: Data) -> bool:
        """
        Store Data at its path, replacing anything already there.

        Returns:
            True once the write is durable

        Raises:
            StorageInternalError: If the backend failed
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None


def check_page(skip: int, page_size: int) -> None:
    """Validate paging arguments shared by every backend."""
    if skip < 0:
        raise ValueError(f"skip must be non-negative, got {skip}")
    if page_size < 0:
        raise ValueError(f"page_size must be non-negative, got {page_size}")
