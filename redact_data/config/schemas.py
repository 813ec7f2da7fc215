"""
redact-data - Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All configuration is read from environment variables (see loader.py).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class CacheBackend(str, Enum):
    """Supported cache backends."""

    MEMORY = "memory"
    REDIS = "redis"


class StorageBackend(str, Enum):
    """Supported backing stores."""

    MEMORY = "memory"
    SQL = "sql"
    REDACT = "redact"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    TEXT = "text"
    JSON = "json"


class CacheConfig(BaseModel):
    """Cache configuration."""

    backend: CacheBackend = Field(default=CacheBackend.MEMORY, description="Cache backend to use")
    ttl_seconds: int = Field(default=60, ge=0, description="Default expiration in seconds (0 = no expiry)")
    max_size: int = Field(default=1000, ge=1, description="Max cache entries (memory backend)")
    namespace: str = Field(default="redact", description="Cache key namespace/prefix")

    # Redis-specific settings (only used when backend=redis)
    redis_url: str | None = Field(default=None, validate_default=True, description="Redis connection URL")
    redis_max_connections: int = Field(default=16, ge=1, description="Redis connection pool size")
    redis_socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str | None, info: Any) -> str | None:
        """Ensure redis_url is provided when backend is redis."""
        backend = info.data.get("backend")
        if backend == CacheBackend.REDIS and not v:
            raise ValueError("redis_url is required when cache backend is 'redis'")
        return v


class StorageConfig(BaseModel):
    """Backing store configuration."""

    backend: StorageBackend = Field(default=StorageBackend.MEMORY, description="Backing store to use")

    # SQL-specific settings (only used when backend=sql)
    database_url: str | None = Field(default=None, validate_default=True, description="SQLAlchemy async database URL")
    pool_size: int | None = Field(default=None, ge=1, description="Database connection pool size")

    # Redact-store settings (only used when backend=redact)
    redact_url: str | None = Field(default=None, validate_default=True, description="Base URL of the redact-store server")
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP request timeout in seconds")

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str | None, info: Any) -> str | None:
        """Ensure database_url is provided when backend is sql."""
        if info.data.get("backend") == StorageBackend.SQL and not v:
            raise ValueError("database_url is required when storage backend is 'sql'")
        return v

    @field_validator("redact_url")
    @classmethod
    def validate_redact_url(cls, v: str | None, info: Any) -> str | None:
        """Ensure redact_url is provided when backend is redact."""
        if info.data.get("backend") == StorageBackend.REDACT and not v:
            raise ValueError("redact_url is required when storage backend is 'redact'")
        return v


class RedactDataConfig(BaseModel):
    """Root configuration for redact-data."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.TEXT, description="Log output format")

    cache: CacheConfig = Field(default_factory=CacheConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
