"""In-memory key-value store.

Nothing survives the process. Used by tests and for throwaway sessions
where the caller wants the full load/migrate/merge pipeline without a file.
"""

from typing import Dict, Optional

from .base import KeyValueStore, validate_key


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data.get(key, default)

    def set(self, key: str, value: str) -> None:
        key = validate_key(key)
        if not isinstance(value, str):
            raise ValueError("Store value must be a string")
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> Dict[str, int]:
        return {k: len(v.encode("utf-8")) for k, v in sorted(self._data.items())}
