"""
redact-data - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the runtime.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import RedactDataConfig

logger = logging.getLogger(__name__)

_config_instance: RedactDataConfig | None = None


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    return int(raw) if raw else None


def _build_config_dict() -> dict[str, Any]:
    """Collect raw configuration values from the environment."""
    # Auto-detect backends from which connection settings are present
    redis_url = os.getenv("REDIS_URL")
    database_url = os.getenv("DATABASE_URL")
    redact_url = os.getenv("REDACT_STORE_URL")

    if database_url:
        storage_backend = "sql"
    elif redact_url:
        storage_backend = "redact"
    else:
        storage_backend = "memory"

    return {
        "environment": os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_format": os.getenv("LOG_FORMAT", "text"),
        "cache": {
            "backend": os.getenv("CACHE_BACKEND", "redis" if redis_url else "memory"),
            "ttl_seconds": int(os.getenv("CACHE_TTL_SECONDS", "60")),
            "max_size": int(os.getenv("CACHE_MAX_SIZE", "1000")),
            "namespace": os.getenv("CACHE_NAMESPACE", "redact"),
            "redis_url": redis_url,
            "redis_max_connections": int(os.getenv("REDIS_MAX_CONNECTIONS", "16")),
            "redis_socket_timeout": int(os.getenv("REDIS_SOCKET_TIMEOUT", "5")),
        },
        "storage": {
            "backend": os.getenv("STORAGE_BACKEND", storage_backend),
            "database_url": database_url,
            "pool_size": _optional_int("STORAGE_POOL_SIZE"),
            "redact_url": redact_url,
            "request_timeout": float(os.getenv("STORAGE_REQUEST_TIMEOUT", "10.0")),
        },
    }


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> RedactDataConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated RedactDataConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info("Loading environment from %s", env_path)
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    try:
        config_dict = _build_config_dict()
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid numeric setting in environment: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = RedactDataConfig(**config_dict)
    except ValidationError as e:
        logger.error(
            "Configuration validation failed: %s",
            e,
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e

    logger.info(
        "Configuration loaded (environment: %s)",
        _config_instance.environment,
        extra={
            "environment": _config_instance.environment,
            "cache_backend": _config_instance.cache.backend,
            "storage_backend": _config_instance.storage.backend,
        },
    )
    return _config_instance


def get_config() -> RedactDataConfig:
    """
    Get the current configuration instance, loading it on first access.
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> RedactDataConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded RedactDataConfig instance
    """
    return load_config(env_file=env_file, reload=True)
