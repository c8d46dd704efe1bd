"""Key-value store protocol for hubstate backends.

The persistence layer keeps exactly one envelope under one key, so the
interface is deliberately small. Currently supported:
- SQLiteStore: local file-backed store (default)
- MemoryStore: process-local dict, for tests and ephemeral sessions
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional


def utc_now() -> str:
    """Get current timestamp as ISO string in UTC."""
    return datetime.now(timezone.utc).isoformat()


def validate_key(key: str) -> str:
    """Validate and normalize a store key.

    Raises:
        ValueError: If key is not a non-empty string
    """
    if not key or not isinstance(key, str):
        raise ValueError("Store key must be a non-empty string")
    key = key.strip()
    if not key:
        raise ValueError("Store key must be a non-empty string")
    return key


class KeyValueStore(ABC):
    """Synchronous string key -> string value store."""

    @abstractmethod
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a value. Returns default if not found."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Set a value. Creates or replaces."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a value. Returns True if something was deleted."""

    @abstractmethod
    def keys(self) -> Dict[str, int]:
        """Map every stored key to its value size in bytes."""

    def close(self) -> None:
        """Release any resources held by the store."""
        pass
