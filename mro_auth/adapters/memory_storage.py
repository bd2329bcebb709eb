"""
Memory Storage Adapter - In-memory key-value store (testing only).
"""

from typing import Optional, Dict
from mro_auth.ports.storage_port import StoragePort


class MemoryStorageAdapter(StoragePort):
    """
    In-memory key-value store.

    WARNING: Only for testing. Values are lost on restart.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        """Initialize in-memory storage, optionally pre-seeded."""
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def keys(self):
        """Stored keys (for assertions in tests)."""
        return list(self._data.keys())
