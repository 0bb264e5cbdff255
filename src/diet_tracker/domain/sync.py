"""Domain models for offline synchronization."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Literal

from diet_tracker.domain.entries import FoodEntry

SyncAction = Literal["add", "delete"]


class SyncFailurePolicy(StrEnum):
    """What a drain does with items whose remote call failed."""

    CLEAR_ALWAYS = "clear_always"
    RETAIN_FAILED = "retain_failed"


@dataclass(frozen=True)
class PendingSyncItem:
    """A local mutation waiting to be replayed remotely."""

    type: SyncAction
    created_at: datetime
    entry: FoodEntry | None = None
    entry_id: str | None = None


@dataclass(frozen=True)
class SyncResult:
    """Outcome of draining the pending queue."""

    success: bool
    synced: int
    failed: int = 0
