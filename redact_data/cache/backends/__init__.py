"""
redact-data - Cache Backends

Exports available cache backend implementations.

Redis backend is lazy-loaded via factory.py to avoid import overhead.
"""

from .memory import MemoryCacher

__all__ = [
    "MemoryCacher",
]
