"""Offline sync queue and its replay against the remote store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from diet_tracker.domain.entries import FoodEntry
from diet_tracker.domain.sync import PendingSyncItem, SyncFailurePolicy, SyncResult
from diet_tracker.services.entries import entry_from_row, entry_to_row
from diet_tracker.services.events import ENTRY_ADDED, ENTRY_DELETED, EventBus
from diet_tracker.services.identity import IdentityProvider
from diet_tracker.services.storage import KeyValueStorage, read_json, write_json

PENDING_SYNC_KEY = "pending_sync"

_logger = logging.getLogger(__name__)


class RemoteEntryRepository(Protocol):
    """Remote persistence for food entries."""

    def insert_entry(self, user_id: UUID, entry: FoodEntry) -> None:
        """Insert a single entry for a user."""

    def insert_entries(self, user_id: UUID, entries: list[FoodEntry]) -> None:
        """Insert entries for a user in one request."""

    def delete_entry(self, user_id: UUID, entry_id: str) -> None:
        """Delete a user's entry by its local id."""


@dataclass
class SyncQueue:
    """Append-only log of local mutations awaiting remote replay."""

    storage: KeyValueStorage
    identity: IdentityProvider
    remote: RemoteEntryRepository
    failure_policy: SyncFailurePolicy = SyncFailurePolicy.CLEAR_ALWAYS

    def pending(self) -> list[PendingSyncItem]:
        """Return queued items in FIFO order."""
        rows = read_json(self.storage, PENDING_SYNC_KEY, [])
        return [_parse_item(row) for row in rows]

    def enqueue(self, item: PendingSyncItem) -> None:
        """Append an item to the queue."""
        items = self.pending()
        items.append(item)
        self._save(items)

    def enqueue_add(self, entry: FoodEntry) -> None:
        """Queue an entry insert."""
        self.enqueue(
            PendingSyncItem(type="add", created_at=datetime.now(tz=UTC), entry=entry)
        )

    def enqueue_delete(self, entry_id: str) -> None:
        """Queue an entry delete."""
        self.enqueue(
            PendingSyncItem(
                type="delete", created_at=datetime.now(tz=UTC), entry_id=entry_id
            )
        )

    def clear(self) -> None:
        """Drop every queued item."""
        self.storage.remove(PENDING_SYNC_KEY)

    def drain(self) -> SyncResult:
        """Replay queued items for the signed-in user."""
        items = self.pending()
        if not items:
            return SyncResult(success=True, synced=0)

        user = self.identity.get_current_user()
        if user is None:
            _logger.info("Sync skipped, no active session (%s pending)", len(items))
            return SyncResult(success=False, synced=0)

        synced = 0
        failed: list[PendingSyncItem] = []
        for item in items:
            try:
                if self._replay(user.id, item):
                    synced += 1
            except Exception:
                _logger.exception("Failed to sync pending %s item", item.type)
                failed.append(item)

        if failed and self.failure_policy is SyncFailurePolicy.RETAIN_FAILED:
            self._save(failed)
        else:
            self.clear()
        if failed:
            _logger.warning(
                "Sync finished with %s failed items (policy=%s)",
                len(failed),
                self.failure_policy,
            )
        return SyncResult(success=True, synced=synced, failed=len(failed))

    def _replay(self, user_id: UUID, item: PendingSyncItem) -> bool:
        if item.type == "add" and item.entry is not None:
            self.remote.insert_entry(user_id, item.entry)
            return True
        if item.type == "delete" and item.entry_id:
            self.remote.delete_entry(user_id, item.entry_id)
            return True
        return False

    def _save(self, items: list[PendingSyncItem]) -> None:
        write_json(self.storage, PENDING_SYNC_KEY, [_item_row(i) for i in items])


@dataclass
class MutationRecorder:
    """Queues every entry mutation and forwards it at once while online.

    Offline mutations stay queued until the connectivity watcher drains them.
    """

    queue: SyncQueue
    is_online: Callable[[], bool]

    def register(self, events: EventBus) -> Callable[[], None]:
        """Listen for entry changes and return a cleanup callable."""
        unsubscribe_added = events.subscribe(ENTRY_ADDED, self._on_entry_added)
        unsubscribe_deleted = events.subscribe(ENTRY_DELETED, self._on_entry_deleted)

        def cleanup() -> None:
            unsubscribe_added()
            unsubscribe_deleted()

        return cleanup

    def _on_entry_added(self, payload: object) -> None:
        if isinstance(payload, FoodEntry):
            self.queue.enqueue_add(payload)
            self._forward()

    def _on_entry_deleted(self, payload: object) -> None:
        if isinstance(payload, str):
            self.queue.enqueue_delete(payload)
            self._forward()

    def _forward(self) -> None:
        if not self.is_online():
            return
        try:
            result = self.queue.drain()
        except Exception:
            _logger.exception("Immediate sync failed, mutation stays queued")
            return
        if not result.success:
            _logger.debug("Mutation queued until a session is available")


def _item_row(item: PendingSyncItem) -> dict[str, object]:
    return {
        "type": item.type,
        "entry": entry_to_row(item.entry) if item.entry else None,
        "entryId": item.entry_id,
        "createdAt": item.created_at.isoformat(),
    }


def _parse_item(row: dict[str, object]) -> PendingSyncItem:
    entry = row.get("entry")
    return PendingSyncItem(
        type=row["type"],
        created_at=datetime.fromisoformat(str(row["createdAt"])),
        entry=entry_from_row(entry) if isinstance(entry, dict) else None,
        entry_id=row.get("entryId"),
    )
