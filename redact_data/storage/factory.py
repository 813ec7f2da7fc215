"""
redact-data - Storage Factory

Canonical factory for backing stores and cached data storers.

- create_storer() builds the configured backing store
  (STORAGE_BACKEND=memory|sql|redact)
- create_data_storer() builds a CachedDataStorer over the configured store
  and cache, and registers it by name so the rest of a process can share it
- close_all_data_storers() must be called during graceful shutdown

Examples:
    from redact_data.storage.factory import create_data_storer

    storer = create_data_storer()
    await storer.create(Data.of("profile.name", "alice"))
    data = await storer.get("profile.name")
"""

from __future__ import annotations

import logging

from ..cache.factory import create_cacher
from ..config import RedactDataConfig, StorageBackend, StorageConfig, get_config
from ..errors import ConfigurationError
from .backends.memory import MemoryDataStorer
from .cached import CachedDataStorer
from .interface import DataStorer

logger = logging.getLogger(__name__)

# Global cached storer registry
_storer_instances: dict[str, CachedDataStorer] = {}


def _create_sql_storer(config: StorageConfig) -> DataStorer:
    if not config.database_url:
        raise ConfigurationError(
            "DATABASE_URL must be set when STORAGE_BACKEND=sql",
            details={"env": "DATABASE_URL", "backend": "sql"},
        )

    from .backends.sql import SQLDataStorer

    return SQLDataStorer(database_url=config.database_url, pool_size=config.pool_size)


def _create_redact_storer(config: StorageConfig) -> DataStorer:
    if not config.redact_url:
        raise ConfigurationError(
            "REDACT_STORE_URL must be set when STORAGE_BACKEND=redact",
            details={"env": "REDACT_STORE_URL", "backend": "redact"},
        )

    from .backends.redact import RedactDataStorer

    return RedactDataStorer(url=config.redact_url, timeout=config.request_timeout)


def create_storer(config: StorageConfig | None = None) -> DataStorer:
    """
    Create a backing store based on configuration.

    Args:
        config: Storage configuration (uses global config if not provided)

    Raises:
        ConfigurationError: If the backend is unknown or misconfigured
    """
    if config is None:
        config = get_config().storage

    logger.info("Creating storer with backend: %s", config.backend, extra={"backend": str(config.backend)})

    if config.backend == StorageBackend.MEMORY:
        return MemoryDataStorer()
    if config.backend == StorageBackend.SQL:
        return _create_sql_storer(config)
    if config.backend == StorageBackend.REDACT:
        return _create_redact_storer(config)

    raise ConfigurationError(
        f"Unknown storage backend: {config.backend}",
        details={"backend": str(config.backend), "supported": [b.value for b in StorageBackend]},
    )


def create_data_storer(
    config: RedactDataConfig | None = None,
    name: str = "default",
) -> CachedDataStorer:
    """
    Create (or return the already registered) cached data storer.

    The returned storer owns its backends: closing it closes the cache and
    the backing store.

    Args:
        config: Full configuration (uses global config if not provided)
        name: Instance name (for multiple independent storers)

    Raises:
        ConfigurationError: If either backend is misconfigured
    """
    if name in _storer_instances:
        logger.debug("Returning existing data storer instance: %s", name)
        return _storer_instances[name]

    if config is None:
        config = get_config()

    storer = create_storer(config.storage)
    cacher = create_cacher(config.cache)
    cached = CachedDataStorer(storer, cacher, owns_backends=True)

    _storer_instances[name] = cached
    logger.info(
        "Data storer instance '%s' created",
        name,
        extra={
            "storer_name": name,
            "storage_backend": str(config.storage.backend),
            "cache_backend": str(config.cache.backend),
        },
    )
    return cached


def get_data_storer(name: str = "default") -> CachedDataStorer:
    """
    Get a registered data storer by name, creating it from the global
    configuration if it doesn't exist yet.
    """
    if name not in _storer_instances:
        return create_data_storer(name=name)

    return _storer_instances[name]


async def close_all_data_storers() -> None:
    """
    Close all registered data storers and release their resources.
    """
    if not _storer_instances:
        logger.debug("No data storer instances to close")
        return

    logger.info("Closing %d data storer instance(s)...", len(_storer_instances))

    for name, storer in list(_storer_instances.items()):
        try:
            await storer.close()
            logger.info("Closed data storer instance: %s", name)
        except Exception as e:
            logger.error(
                "Error closing data storer instance '%s': %s",
                name,
                e,
                extra={"storer_name": name, "error": str(e)},
                exc_info=True,
            )

    _storer_instances.clear()


def reset_data_storer_factory() -> None:
    """
    Forget all registered instances without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_storer_instances)
    _storer_instances.clear()
    logger.debug("Reset data storer factory, cleared %d instance reference(s)", count)


def list_data_storers() -> list[str]:
    """List all registered data storer names."""
    return list(_storer_instances.keys())
