"""
Storage Services Package

Provides the abstract settings-store interface and its implementations.
The JSON file store is the default backend; the in-memory store is for
tests and embedding.
"""

from finance_ledger.services.storage.interface import (
    KeyValueStoreInterface,
    StorageConnectionError,
    StorageError,
)
from finance_ledger.services.storage.json_file import JsonFileKeyValueStore
from finance_ledger.services.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interface
    "KeyValueStoreInterface",
    # Exceptions
    "StorageConnectionError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
