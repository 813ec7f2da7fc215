"""
redact-data - Storage Backends

The memory backend is exported here; the SQL and redact-store backends are
loaded lazily by factory.py so their drivers are only imported when used.
"""

from .memory import MemoryDataStorer

__all__ = [
    "MemoryDataStorer",
]
