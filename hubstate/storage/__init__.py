"""hubstate storage backends.

A single-key envelope store. Local-first storage using SQLite.
"""

from .base import KeyValueStore, utc_now, validate_key
from .memory import MemoryStore
from .sqlite import SQLiteStore

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SQLiteStore",
    "utc_now",
    "validate_key",
]
