"""
Storage Connection Module.

Key-value persistence for the record list: a JSON file on disk standing in
for browser localStorage, and an in-memory store.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from loguru import logger

from src.errors import PersistenceError

storage_log = logger.bind(module="Storage")


class KeyValueStore(ABC):
    """String key → string value persistence."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            PersistenceError: write failed
        """
        pass


class MemoryStore(KeyValueStore):
    """In-memory store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """Store all keys in one JSON object file."""

    def __init__(self, path: Path):
        """
        Initialize store.

        Args:
            path: JSON file path (created on first write)
        """
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            storage_log.error(f"Failed to read {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            storage_log.error(f"Ignoring {self.path}: top level is not an object")
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
            )
        except OSError as e:
            storage_log.error(f"Failed to write {self.path}: {e}")
            raise PersistenceError(f"儲存記錄失敗：{e}") from e
        storage_log.debug(f"Saved key {key!r} to {self.path}")
