"""
redact-data - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
import socket
from collections.abc import Generator
from pathlib import Path

import pytest

from redact_data.data import Data, DataType, EncryptedDataValue

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

CONFIG_ENV_VARS = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "CACHE_BACKEND",
    "CACHE_TTL_SECONDS",
    "CACHE_MAX_SIZE",
    "CACHE_NAMESPACE",
    "REDIS_URL",
    "REDIS_MAX_CONNECTIONS",
    "REDIS_SOCKET_TIMEOUT",
    "STORAGE_BACKEND",
    "DATABASE_URL",
    "REDACT_STORE_URL",
    "STORAGE_REQUEST_TIMEOUT",
    "STORAGE_POOL_SIZE",
)


def is_redis_available() -> bool:
    """Check if Redis server is available for testing."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("localhost", 6379))
        sock.close()
        return result == 0
    except OSError:
        return False


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove every configuration variable and run from an empty directory (no .env)."""
    for name in CONFIG_ENV_VARS:
        # setenv first so monkeypatch restores variables written later by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_env_memory(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for memory cache and memory storage."""
    monkeypatch.setenv("CACHE_BACKEND", "memory")
    monkeypatch.setenv("CACHE_MAX_SIZE", "100")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "3600")
    monkeypatch.setenv("CACHE_NAMESPACE", "test")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")


@pytest.fixture
def mock_env_redis(clean_env: None, monkeypatch: pytest.MonkeyPatch, test_redis_url: str) -> None:
    """Set environment variables for Redis cache backend."""
    if not is_redis_available():
        pytest.skip("Redis not available")
    monkeypatch.setenv("CACHE_BACKEND", "redis")
    monkeypatch.setenv("REDIS_URL", test_redis_url)
    monkeypatch.setenv("REDIS_MAX_CONNECTIONS", "5")
    monkeypatch.setenv("REDIS_SOCKET_TIMEOUT", "2")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "3600")
    monkeypatch.setenv("CACHE_NAMESPACE", "test")


@pytest.fixture
def sample_data() -> Data:
    """A single-value unencrypted Data."""
    return Data.of("profile.name", "alice")


@pytest.fixture
def sample_encrypted_data() -> Data:
    """A Data mixing plaintext and encrypted values."""
    return Data.of(
        ".profile.email.",
        "mail: ",
        EncryptedDataValue(value=b"\x00\xffsecret", data_type=DataType.STRING, key="k1"),
        encrypted_by=["k1"],
    )


@pytest.fixture
def sample_data_set() -> list[Data]:
    """Several Data under two sibling prefixes."""
    return [
        Data.of("users.alice.age", 31),
        Data.of("users.alice.name", "Alice"),
        Data.of("users.bob.age", 27),
        Data.of("users.bob.balance", -12),
        Data.of("groups.admins", "alice"),
    ]


@pytest.fixture(autouse=True)
def reset_factories() -> Generator[None, None, None]:
    """Reset the config singleton and storer registry after each test to prevent state leakage."""
    yield
    from redact_data.config import loader
    from redact_data.storage.factory import reset_data_storer_factory

    reset_data_storer_factory()
    loader._config_instance = None
