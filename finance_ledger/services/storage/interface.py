"""
Abstract Storage Interface

DESIGN DECISION: The ledger persists through a plain string key-value
settings store, the same shape a device's local preferences offer.
This allows us to:
1. Keep the document on disk as a JSON settings file
2. Use in-memory storage for testing
3. Swap in another local store without touching ledger logic

The interface is intentionally tiny: the ledger reads and overwrites one
whole document at a time, so no partial updates are needed.
"""

from abc import ABC, abstractmethod


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for a synchronous string key-value store.

    Any settings backend must implement these methods.
    """

    @abstractmethod
    def get_string(self, key: str, default: str = "") -> str:
        """
        Read the string stored under a key.

        Args:
            key: Key to read
            default: Returned when the key is absent

        Returns:
            The stored string, or default

        Raises:
            StorageError: If the backing resource cannot be read
        """
        pass

    @abstractmethod
    def set_string(self, key: str, value: str) -> None:
        """
        Store a string under a key, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def has_key(self, key: str) -> bool:
        """Check if a key holds a value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageConnectionError(StorageError):
    """Could not read or write the backing resource."""
    pass
