"""
redact-data - Redis Cache Backend

Asynchronous Redis cache implementation with:
- Namespace prefixing for safe multi-tenant usage
- Per-key TTL via SET EX and EXPIRE
- A pooled client (connections are acquired per command)

RedisCacher stores plain strings. RedisDataCacher stores Data as its JSON
serialization, so a set followed by a get reproduces an equal Data.

Requires: redis>=5.0 with asyncio support

Example:
    cache = RedisDataCacher(redis_url="redis://localhost:6379", namespace="redact", default_ttl=60)
    await cache.set(".profile.name.", data)
    data = await cache.get(".profile.name.")
"""

from __future__ import annotations

import logging
from typing import Any

from redis.asyncio import Redis

from ...data import Data
from ...errors import CacheInternalError, CacheNotFoundError
from ..interface import Cacher, V

logger = logging.getLogger(__name__)


class RedisCacher(Cacher[V]):
    """
    Redis cache backend for string values.

    Notes:
    - Keys are prefixed with the configured namespace to avoid collisions.
    - TTL is applied via Redis EX seconds (None -> default_ttl, 0 -> no expiry).
    - Every Redis failure is raised as CacheInternalError wrapping the
      redis-py exception.

    Subclasses change the stored value type by overriding _encode/_decode.
    """

    def __init__(
        self,
        redis_url: str | None = None,
        namespace: str = "redact",
        default_ttl: int = 60,
        max_connections: int = 16,
        socket_timeout: int = 5,
        client: Redis | None = None,
    ) -> None:
        """
        Initialize Redis cache backend.

        Args:
            redis_url: Connection URL, e.g., redis://localhost:6379/0 or rediss:// for TLS
            namespace: Prefix for all keys (e.g., "redact")
            default_ttl: Default TTL in seconds (0 => no expiry)
            max_connections: Connection pool size
            socket_timeout: Socket timeout in seconds
            client: Pre-built client to use instead of connecting to redis_url
        """
        if client is None and not redis_url:
            raise ValueError("redis_url is required")

        self.namespace = namespace.strip() or "redact"
        self.default_ttl = max(0, int(default_ttl))

        # Lazy connection; connects on first command
        if client is None:
            client = Redis.from_url(  # type: ignore[call-overload]
                url=redis_url,
                decode_responses=True,
                max_connections=max_connections,
                socket_timeout=socket_timeout,
            )
        self._client: Redis = client

    # ------------ Helpers ------------

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        return f"{self.namespace}:{key}"

    def _encode(self, value: V) -> str:
        return str(value)

    def _decode(self, raw: str) -> V:
        value: V = raw  # type: ignore[assignment]
        return value

    def _ttl_seconds(self, ttl: int | None) -> int | None:
        """
        Normalize TTL:
        - None -> default_ttl
        - 0 or negative -> no expiry (return None)
        - positive -> provided ttl
        """
        if ttl is None:
            ttl = self.default_ttl
        ttl = int(ttl)
        return ttl if ttl > 0 else None

    def _internal_error(self, op: str, key: str, e: Exception) -> CacheInternalError:
        logger.error(
            "Redis %s failed for key '%s': %s",
            op,
            key,
            e,
            extra={"key": key, "namespace": self.namespace, "operation": op, "error": str(e)},
            exc_info=True,
        )
        return CacheInternalError(e, details={"key": key, "operation": op})

    # ------------ Core Interface ------------

    def default_expiration_seconds(self) -> int:
        return self.default_ttl

    async def set(self, key: str, value: V, ttl: int | None = None) -> None:
        """Store a value with optional TTL."""
        try:
            payload = self._encode(value)
        except (TypeError, ValueError) as e:
            raise self._internal_error("serialize", key, e) from e

        try:
            await self._client.set(name=self._make_key(key), value=payload, ex=self._ttl_seconds(ttl))
        except Exception as e:
            raise self._internal_error("set", key, e) from e

    async def get(self, key: str) -> V:
        """Retrieve a value by key."""
        try:
            raw = await self._client.get(self._make_key(key))
        except Exception as e:
            raise self._internal_error("get", key, e) from e

        if raw is None:
            raise CacheNotFoundError(key)

        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")

        try:
            return self._decode(raw)
        except (ValueError, UnicodeDecodeError) as e:
            raise self._internal_error("deserialize", key, e) from e

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        try:
            return bool(await self._client.exists(self._make_key(key)))
        except Exception as e:
            raise self._internal_error("exists", key, e) from e

    async def expire(self, key: str, seconds: int) -> bool:
        """Reset the TTL of an existing key (0 or less => PERSIST, no expiry)."""
        redis_key = self._make_key(key)
        try:
            if int(seconds) <= 0:
                if not await self._client.exists(redis_key):
                    return False
                await self._client.persist(redis_key)
                return True
            return bool(await self._client.expire(redis_key, int(seconds)))
        except Exception as e:
            raise self._internal_error("expire", key, e) from e

    async def clear(self) -> None:
        """
        Clear all entries under the namespace.

        Implementation: SCAN match "<namespace>:*" and DEL in batches.
        """
        pattern = f"{self.namespace}:*"
        cursor = 0
        total_deleted = 0

        try:
            while True:
                cursor, keys = await self._client.scan(cursor=cursor, match=pattern, count=1000)
                if keys:
                    total_deleted += await self._client.delete(*keys)
                if cursor == 0:
                    break
        except Exception as e:
            raise self._internal_error("clear", pattern, e) from e

        logger.info("Cleared %d keys from namespace '%s'", total_deleted, self.namespace)

    async def get_stats(self) -> dict[str, Any]:
        """Return basic connectivity information."""
        stats: dict[str, Any] = {
            "backend": "redis",
            "namespace": self.namespace,
            "default_ttl": self.default_ttl,
            "connected": False,
        }

        try:
            stats["connected"] = bool(await self._client.ping())
            info = await self._client.info(section="server")
            stats["redis_version"] = info.get("redis_version")
        except Exception as e:
            logger.warning("Failed to get Redis INFO (restricted or unavailable): %s", e, extra={"error": str(e)})

        return stats

    async def close(self) -> None:
        """Close the Redis client and release resources."""
        try:
            await self._client.aclose()
            logger.info("Closed Redis cache backend for namespace '%s'", self.namespace)
        except Exception as e:
            logger.error(
                "Error closing Redis client: %s", e, extra={"namespace": self.namespace, "error": str(e)}, exc_info=True
            )
        finally:
            try:
                await self._client.connection_pool.disconnect()
            except Exception as e:
                logger.warning("Error disconnecting Redis connection pool: %s", e, extra={"error": str(e)})


class RedisDataCacher(RedisCacher[Data]):
    """Redis cache backend holding Data serialized as JSON."""

    def _encode(self, value: Data) -> str:
        return value.model_dump_json()

    def _decode(self, raw: str) -> Data:
        return Data.model_validate_json(raw)
