"""In-memory settings store, for tests and embedding."""

from typing import Optional

from finance_ledger.services.storage.interface import KeyValueStoreInterface


class InMemoryKeyValueStore(KeyValueStoreInterface):
    """Dict-backed settings store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get_string(self, key: str, default: str = "") -> str:
        return self._values.get(key, default)

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value

    def has_key(self, key: str) -> bool:
        return key in self._values

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
