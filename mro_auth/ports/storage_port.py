"""
Storage Port - Interface for the persistent key-value store.

Implementations:
- MemoryStorageAdapter: In-memory store (testing only)
- RedisStorageAdapter: Redis-backed store
"""

from abc import ABC, abstractmethod
from typing import Optional


class StoragePort(ABC):
    """Port: Synchronous persistent key-value store (string values)."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored value, or None if absent
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any existing one.

        Args:
            key: Storage key
            value: String value
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Args:
            key: Storage key

        Returns:
            True if the key existed, False otherwise
        """
        pass

    def contains(self, key: str) -> bool:
        """Check if a key is present."""
        return self.get(key) is not None
