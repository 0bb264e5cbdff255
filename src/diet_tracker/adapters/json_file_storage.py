"""JSON file implementation of local key-value storage."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from diet_tracker.services.storage import KeyValueStorage, StorageError


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Stores all keys in one JSON document, rewritten on every change."""

    path: Path
    _items: dict[str, str] | None = field(default=None, init=False, repr=False)

    @classmethod
    def create(cls, path: str | Path) -> "JsonFileStorage":
        """Create storage for a path, expanding `~`."""
        return cls(path=Path(path).expanduser())

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value and flush the file."""
        items = dict(self._load())
        items[key] = value
        self._flush(items)
        self._items = items

    def remove(self, key: str) -> None:
        """Remove a key and flush the file if it was present."""
        items = dict(self._load())
        if items.pop(key, None) is None:
            return
        self._flush(items)
        self._items = items

    def _load(self) -> dict[str, str]:
        if self._items is None:
            self._items = self._read_file()
        return self._items

    def _read_file(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to read {self.path}") from exc
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt storage file {self.path}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} is not a JSON object")
        return {str(key): str(value) for key, value in data.items()}

    def _flush(self, items: dict[str, str]) -> None:
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Failed to write {self.path}") from exc
