"""
redact-data - Cache Factory

Creates Data cachers from configuration.

Key points:
- Select backend with CACHE_BACKEND=memory|redis (memory by default,
  redis when REDIS_URL is set)
- The redis backend module is imported lazily so memory-only deployments
  never touch the redis client
- All configuration is typed and validated via Pydantic models
"""

from __future__ import annotations

import logging

from ..config import CacheBackend, CacheConfig, get_config
from ..data import Data
from ..errors import ConfigurationError
from .backends.memory import MemoryCacher
from .interface import Cacher

logger = logging.getLogger(__name__)


def _create_memory_cacher(config: CacheConfig) -> Cacher[Data]:
    return MemoryCacher[Data](
        max_size=config.max_size,
        default_ttl=config.ttl_seconds,
        namespace=config.namespace,
    )


def _create_redis_cacher(config: CacheConfig) -> Cacher[Data]:
    if not config.redis_url:
        raise ConfigurationError(
            "REDIS_URL must be set when CACHE_BACKEND=redis",
            details={"env": "REDIS_URL", "backend": "redis"},
        )

    try:
        from .backends.redis import RedisDataCacher
    except ImportError as e:
        raise ConfigurationError(
            "Redis backend selected but redis client is unavailable. Install with: pip install 'redis>=5.0.0'",
            details={"package": "redis>=5.0.0", "error": str(e), "backend": "redis"},
        ) from e

    return RedisDataCacher(
        redis_url=config.redis_url,
        namespace=config.namespace,
        default_ttl=config.ttl_seconds,
        max_connections=config.redis_max_connections,
        socket_timeout=config.redis_socket_timeout,
    )


def create_cacher(config: CacheConfig | None = None) -> Cacher[Data]:
    """
    Create a Data cacher based on configuration.

    Args:
        config: Cache configuration (uses global config if not provided)

    Returns:
        Configured cache backend instance

    Raises:
        ConfigurationError: If the backend is unknown or unavailable
    """
    if config is None:
        config = get_config().cache

    logger.info("Creating cacher with backend: %s", config.backend, extra={"backend": str(config.backend)})

    if config.backend == CacheBackend.MEMORY:
        return _create_memory_cacher(config)
    if config.backend == CacheBackend.REDIS:
        return _create_redis_cacher(config)

    raise ConfigurationError(
        f"Unknown cache backend: {config.backend}",
        details={"backend": str(config.backend), "supported": [b.value for b in CacheBackend]},
    )
