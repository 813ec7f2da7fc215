"""
redact-data - Storage Module

- interface.py: DataStorer contract for backing stores
- cached.py: CachedDataStorer, the cache-aside façade
- factory.py: builds stores and cached storers from configuration
- backends/: memory, sql and redact-store implementations
"""

from .cached import CachedDataStorer
from .factory import (
    close_all_data_storers,
    create_data_storer,
    create_storer,
    get_data_storer,
    list_data_storers,
    reset_data_storer_factory,
)
from .interface import DataStorer

__all__ = [
    "DataStorer",
    "CachedDataStorer",
    # Factory functions
    "create_storer",
    "create_data_storer",
    "get_data_storer",
    "list_data_storers",
    "close_all_data_storers",
    "reset_data_storer_factory",
]
