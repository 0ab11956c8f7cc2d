"""
Infrastructure layer: Key-value stores for saved field records.

Records are opaque JSON-compatible dicts keyed by an identifier the caller
assigns. Two backends are provided: process memory and a single JSON file.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol
import json
import logging
import os
import tempfile
import threading

from field_architect.config import settings

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class StorageError(Exception):
    """Raised when the backing store cannot be read or written."""
    pass


class KeyValueStore(Protocol):
    """Minimal storage contract used by the application layer."""

    def get(self, key: str) -> Optional[Record]: ...

    def put(self, key: str, value: Record) -> None: ...

    def delete(self, key: str) -> bool: ...

    def values(self) -> List[Record]: ...


class InMemoryKeyValueStore:
    """Store backed by a dict; contents are lost on restart."""

    def __init__(self):
        self._data: Dict[str, Record] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Record]:
        with self._lock:
            value = self._data.get(key)
            return dict(value) if value is not None else None

    def put(self, key: str, value: Record) -> None:
        with self._lock:
            self._data[key] = dict(value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def values(self) -> List[Record]:
        with self._lock:
            return [dict(v) for v in self._data.values()]


class JsonFileKeyValueStore:
    """
    Store backed by one JSON object on disk.

    The whole file is rewritten on every put/delete by replacing it with a
    fully written sibling temp file. A missing or empty file reads as an
    empty store.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Record]:
        with self._lock:
            return self._read().get(key)

    def put(self, key: str, value: Record) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> bool:
        with self._lock:
            data = self._read()
            if key not in data:
                return False
            del data[key]
            self._write(data)
            return True

    def values(self) -> List[Record]:
        with self._lock:
            return list(self._read().values())

    def _read(self) -> Dict[str, Record]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e

        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt store file {self.path}: {e}")
            raise StorageError(f"Store file {self.path} is not valid JSON") from e

        if not isinstance(data, dict):
            raise StorageError(f"Store file {self.path} must contain a JSON object")
        return data

    def _write(self, data: Dict[str, Record]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(data, tmp, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except Exception as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            if isinstance(e, OSError):
                raise StorageError(f"Could not write {self.path}: {e}") from e
            raise


# Singleton instance
_store: Optional[KeyValueStore] = None


def get_key_value_store() -> KeyValueStore:
    """
    Get or create the singleton store configured by settings.

    Returns:
        JsonFileKeyValueStore when saved_fields_path is set, else in-memory
    """
    global _store
    if _store is None:
        if settings.saved_fields_path:
            logger.info(f"Saving fields to {settings.saved_fields_path}")
            _store = JsonFileKeyValueStore(settings.saved_fields_path)
        else:
            _store = InMemoryKeyValueStore()
    return _store
