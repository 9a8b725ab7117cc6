"""
Services Package

External resources the ledger depends on.
"""

from finance_ledger.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreInterface",
    "StorageConnectionError",
    "StorageError",
]
