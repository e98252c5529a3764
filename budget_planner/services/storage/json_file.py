"""
JSON File Storage Implementation

DESIGN DECISION: The snapshot lives in one JSON object file that maps
each storage key to a string value, the same layout browser localStorage
uses. This gives us:
1. A file the user can open and read
2. No database setup
3. Atomic replacement on every write (temp file + rename)

TRADEOFFS:
- Every write rewrites the whole file (fine for a personal ledger)
- Single process only (the engine is single-threaded anyway)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from budget_planner.config import get_settings
from budget_planner.services.storage.interface import (
    KeyValueStorageInterface,
    StorageConnectionError,
    StorageError,
)


logger = structlog.get_logger("budget_planner.storage")


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """
    Key-value storage backed by a single JSON file.

    Reads and writes are retried on OSError; once retries are exhausted
    the failure surfaces as StorageError.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        retry_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._path = Path(path or settings.path)
        self._retry_attempts = retry_attempts or settings.retry_attempts

        parent = self._path.parent
        if parent.exists() and not parent.is_dir():
            raise StorageConnectionError(
                f"Storage directory is not a directory: {parent}"
            )

    @property
    def path(self) -> Path:
        return self._path

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    def _read_file(self) -> Optional[str]:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _read_all(self) -> dict:
        """
        Load the whole key-value mapping.

        Raises:
            StorageError: If the file is unreadable or not a JSON object
        """
        try:
            raw = None
            for attempt in self._retrying():
                with attempt:
                    raw = self._read_file()
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        if raw is None or not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file {self._path} is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} does not hold a JSON object")

        return data

    def _write_all(self, data: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None or isinstance(value, str):
            return value
        # Hand-edited files may hold raw JSON instead of a string
        return json.dumps(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError as e:
            logger.warning(
                "storage_file_replaced",
                path=str(self._path),
                error=str(e),
            )
            data = {}

        data[key] = value

        try:
            for attempt in self._retrying():
                with attempt:
                    self._write_all(data)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")
