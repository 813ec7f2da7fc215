"""
redact-data - Cache Module

Provides caching with pluggable backends.

- interface.py: Cacher contract all backends implement
- factory.py: creates the configured Data cacher
- backends/: memory (always available) and redis

Usage:
    from redact_data.cache import create_cacher

    cache = create_cacher()
    await cache.set(".profile.name.", data, ttl=60)
    data = await cache.get(".profile.name.")
"""

from .factory import create_cacher
from .interface import Cacher, DataCacher

__all__ = [
    "create_cacher",
    "Cacher",
    "DataCacher",
]
