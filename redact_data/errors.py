"""
redact-data - Core Error Types

Defines the exception hierarchy for the redact-data library.
All exceptions inherit from RedactDataError for consistent error handling.

Two base families mirror the two capabilities:
- StorageError: raised by DataStorer backends
- CacheError: raised by Cacher backends

Each family has a NotFound variant (absence, a normal outcome) and an
InternalError variant wrapping an opaque lower-level cause.

CachedDataStorerError tags every failure raised by the cache-aside
façade with its origin so callers can branch on it.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Stable error codes for callers that report errors across a boundary.
    """

    # Storage errors
    STORAGE_NOT_FOUND = "STORAGE_NOT_FOUND"
    STORAGE_FAILURE = "STORAGE_FAILURE"

    # Cache errors
    CACHE_MISS = "CACHE_MISS"
    CACHE_FAILURE = "CACHE_FAILURE"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorOrigin(str, Enum):
    """Which collaborator of a CachedDataStorer produced a failure."""

    CACHE = "cache"
    STORAGE = "storage"


class RedactDataError(Exception):
    """Base exception for all redact-data errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(RedactDataError):
    """Raised when configuration is invalid or missing."""

    pass


# ------------ Storage ------------


class StorageError(RedactDataError):
    """Base exception for backing-store errors."""

    pass


class StorageNotFoundError(StorageError):
    """Raised when no data is stored at the requested path."""

    def __init__(self, path: str | None = None):
        details = {"path": path} if path is not None else None
        super().__init__("Data not found", details)
        self.path = path


class StorageInternalError(StorageError):
    """
    Raised when a backing-store operation fails.

    The lower-level failure is kept opaque in ``cause`` and is also
    chained as ``__cause__`` when raised with ``from``.
    """

    def __init__(self, cause: BaseException, details: dict[str, Any] | None = None):
        error_details = dict(details or {})
        error_details.setdefault("cause", str(cause))
        super().__init__("Internal error occurred", error_details)
        self.cause = cause


# ------------ Cache ------------


class CacheError(RedactDataError):
    """Base exception for cache errors."""

    pass


class CacheNotFoundError(CacheError):
    """Raised when a cache entry is absent or expired."""

    def __init__(self, key: str | None = None):
        details = {"key": key} if key is not None else None
        super().__init__("Cache entry not found", details)
        self.key = key


class CacheInternalError(CacheError):
    """Raised when a cache operation fails (transport, serialization, ...)."""

    def __init__(self, cause: BaseException, details: dict[str, Any] | None = None):
        error_details = dict(details or {})
        error_details.setdefault("cause", str(cause))
        super().__init__("Internal error occurred", error_details)
        self.cause = cause


# ------------ Cached storer ------------


class CachedDataStorerError(RedactDataError):
    """
    Failure raised by CachedDataStorer, tagged with its origin.

    ``source`` is the StorageError or CacheError that caused it. A cache-origin
    failure can usually be treated as non-fatal (retry against the store
    directly) while a storage-origin failure is fatal to the request.
    """

    origin: ErrorOrigin

    def __init__(self, source: StorageError | CacheError):
        details = {"origin": self.origin.value, **source.details}
        super().__init__(source.message, details)
        self.source = source

    @property
    def is_not_found(self) -> bool:
        """True if the wrapped error signals absence rather than failure."""
        return isinstance(self.source, StorageNotFoundError | CacheNotFoundError)

    def __str__(self) -> str:
        return f"{self.origin.value} error: {self.message}"


class StorageOriginError(CachedDataStorerError):
    """A CachedDataStorer failure that came from the backing store."""

    origin = ErrorOrigin.STORAGE

    def __init__(self, source: StorageError):
        super().__init__(source)


class CacheOriginError(CachedDataStorerError):
    """A CachedDataStorer failure that came from the cache."""

    origin = ErrorOrigin.CACHE

    def __init__(self, source: CacheError):
        super().__init__(source)


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract appropriate ErrorCode from an exception.

    Origin-tagged errors are classified by the error they wrap.
    """
    if isinstance(error, CachedDataStorerError):
        return extract_error_code(error.source)

    if isinstance(error, StorageNotFoundError):
        return ErrorCode.STORAGE_NOT_FOUND

    if isinstance(error, StorageError):
        return ErrorCode.STORAGE_FAILURE

    if isinstance(error, CacheNotFoundError):
        return ErrorCode.CACHE_MISS

    if isinstance(error, CacheError):
        return ErrorCode.CACHE_FAILURE

    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIGURATION_ERROR

    if isinstance(error, RedactDataError):
        return ErrorCode.INTERNAL_ERROR

    return ErrorCode.UNKNOWN_ERROR
