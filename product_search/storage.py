"""
product_search/storage.py
-------------------------

Device-local key-value persistence, shaped like browser ``localStorage``:
string keys mapping to string values.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union


class StorageError(Exception):
    """The underlying storage could not be read or written."""


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage, mostly for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """
    Key-value pairs kept in a single JSON object file. Writes go to a
    temporary file in the same directory and are moved into place with
    ``os.replace``, so readers never see a half-written file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self, strict: bool = True) -> Dict[str, str]:
        """Load the file. With strict=False a corrupted file reads as empty
        so the next write replaces it."""
        try:
            if not self.path.exists():
                return {}
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        except ValueError as e:
            if not strict:
                return {}
            raise StorageError(f"Corrupted storage file {self.path}: {e}") from e
        if not isinstance(data, dict):
            if not strict:
                return {}
            raise StorageError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return value if value is None or isinstance(value, str) else json.dumps(value)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read(strict=False)
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read(strict=False)
            if key in data:
                del data[key]
                self._write(data)
