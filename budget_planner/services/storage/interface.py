"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted to a plain key-value medium
(string keys, string values), the same shape as browser localStorage.
This allows us to:
1. Keep the snapshot readable and hand-editable
2. Use in-memory storage for testing
3. Swap the JSON file for another medium without touching the store

The interface is intentionally tiny - the persistence adapter owns
serialization, backends only move strings.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for durable key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: The storage key
            value: The serialized value

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageConnectionError(StorageError):
    """Could not open the storage backend."""
    pass
