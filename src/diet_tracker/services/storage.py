"""Key-value storage abstractions for local-first data."""

import json
from dataclasses import dataclass
from typing import Protocol


class StorageError(RuntimeError):
    """Raised when local storage cannot be read or written."""


class KeyValueStorage(Protocol):
    """Durable string storage addressed by key."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""

    def remove(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class InMemoryStorage(KeyValueStorage):
    """Process-local storage, used in tests and ephemeral runs."""

    _items: dict[str, str]

    def __init__(self) -> None:
        self._items = {}

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""
        self._items[key] = value

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self._items.pop(key, None)


def read_json(storage: KeyValueStorage, key: str, default: object) -> object:
    """Decode the JSON value stored under a key, or return the default."""
    raw = storage.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Corrupt value stored under {key!r}") from exc


def write_json(storage: KeyValueStorage, key: str, value: object) -> None:
    """Encode a value as JSON and store it under a key."""
    storage.set(key, json.dumps(value, ensure_ascii=False))
