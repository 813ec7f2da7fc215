"""
redact-data

Data model for addressable, optionally-encrypted values and a cache-aside
storage layer composing a durable store with a fast cache.
"""

__version__ = "0.1.0"

from .cache import Cacher, DataCacher, create_cacher
from .data import (
    Data,
    DataCollection,
    DataPath,
    DataType,
    DataValue,
    EncryptedDataValue,
    UnencryptedDataValue,
    normalize_path,
)
from .errors import (
    CachedDataStorerError,
    CacheError,
    CacheInternalError,
    CacheNotFoundError,
    CacheOriginError,
    ConfigurationError,
    ErrorOrigin,
    RedactDataError,
    StorageError,
    StorageInternalError,
    StorageNotFoundError,
    StorageOriginError,
)
from .storage import CachedDataStorer, DataStorer, create_data_storer, get_data_storer

__all__ = [
    # Data model
    "Data",
    "DataCollection",
    "DataPath",
    "DataType",
    "DataValue",
    "EncryptedDataValue",
    "UnencryptedDataValue",
    "normalize_path",
    # Capabilities
    "DataStorer",
    "Cacher",
    "DataCacher",
    "CachedDataStorer",
    # Factories
    "create_cacher",
    "create_data_storer",
    "get_data_storer",
    # Errors
    "RedactDataError",
    "ConfigurationError",
    "StorageError",
    "StorageNotFoundError",
    "StorageInternalError",
    "CacheError",
    "CacheNotFoundError",
    "CacheInternalError",
    "CachedDataStorerError",
    "CacheOriginError",
    "StorageOriginError",
    "ErrorOrigin",
]
