"""TTL cache for external lookups."""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for lookup results."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for `ttl_seconds`."""


@dataclass
class LookupCache(Cache):
    """Bounded in-memory cache; the oldest key is evicted when full."""

    max_entries: int
    _entries: OrderedDict[str, tuple[object, datetime]]

    def __init__(self, max_entries: int = 512) -> None:
        self.max_entries = max_entries
        self._entries = OrderedDict()

    def get(self, key: str) -> object | None:
        """Return a live value, dropping it if expired."""
        cached = self._entries.get(key)
        if cached is None:
            return None
        value, expires_at = cached
        if datetime.now(tz=UTC) >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value, evicting the oldest key past capacity."""
        self._entries.pop(key, None)
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = (value, expires_at)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
