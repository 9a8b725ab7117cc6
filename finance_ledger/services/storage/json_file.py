"""
JSON File Settings Store

All keys live in a single JSON object on disk, like a device's local
application settings. Every call reads or rewrites the whole file; the
ledger only ever touches one key, so this stays cheap.

TRADEOFFS:
- No locking (the ledger is single-process, single-threaded)
- Whole-file rewrite on every set (the file is small)
- Writes go through a temp file + os.replace so readers never see
  a half-written file
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_ledger.services.storage.interface import (
    KeyValueStoreInterface,
    StorageConnectionError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """
    Settings store backed by one JSON file.

    A missing file reads as empty. A file that is not UTF-8 or does not hold
    a JSON object is treated as empty too and gets replaced on the next write.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _read_file(self) -> dict:
        """Read and decode the settings file."""
        if not self._path.exists():
            return {}

        try:
            text = self._path.read_text(encoding="utf-8")
            if not text.strip():
                return {}
            values = json.loads(text)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                "settings_file_unreadable",
                path=str(self._path),
                error=str(e),
            )
            return {}

        if not isinstance(values, dict):
            logger.warning(
                "settings_file_not_an_object",
                path=str(self._path),
                found=type(values).__name__,
            )
            return {}

        return values

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_file(self, values: dict) -> None:
        """Atomically replace the settings file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(values, tmp, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _load(self) -> dict:
        try:
            return self._read_file()
        except OSError as e:
            raise StorageConnectionError(
                f"Failed to read settings file {self._path}: {e}"
            ) from e

    def _store(self, values: dict) -> None:
        try:
            self._write_file(values)
        except OSError as e:
            raise StorageConnectionError(
                f"Failed to write settings file {self._path}: {e}"
            ) from e

    def get_string(self, key: str, default: str = "") -> str:
        value = self._load().get(key)
        # Keys written by something else with a non-string value read as absent
        if not isinstance(value, str):
            return default
        return value

    def set_string(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._store(values)

    def has_key(self, key: str) -> bool:
        return key in self._load()

    def remove(self, key: str) -> None:
        values = self._load()
        if key not in values:
            return
        del values[key]
        self._store(values)
