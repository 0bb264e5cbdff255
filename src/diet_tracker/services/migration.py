"""One-time upload of pre-login entries to the remote store."""

import logging
from dataclasses import dataclass

from diet_tracker.domain.models import UserRecord
from diet_tracker.services.entries import EntryStore
from diet_tracker.services.identity import IdentityProvider
from diet_tracker.services.storage import KeyValueStorage
from diet_tracker.services.sync import RemoteEntryRepository

MIGRATION_KEY_PREFIX = "migrated_"

_logger = logging.getLogger(__name__)


@dataclass
class MigrationService:
    """Moves locally logged entries to the remote store once per user."""

    storage: KeyValueStorage
    identity: IdentityProvider
    remote: RemoteEntryRepository
    entries: EntryStore

    def is_migrated(self, user: UserRecord) -> bool:
        """Return True when the user's migration flag is set."""
        return self.storage.get(_migration_key(user)) is not None

    def migrate(self, user: UserRecord | None = None) -> int:
        """Upload local entries for the user and return how many were sent.

        A failed upload leaves the flag unset so the next login retries.
        """
        resolved = user or self.identity.get_current_user()
        if resolved is None or self.is_migrated(resolved):
            return 0

        local_entries = self.entries.get_all_entries()
        if local_entries:
            try:
                self.remote.insert_entries(resolved.id, local_entries)
            except Exception:
                _logger.exception("Migration failed for user %s", resolved.id)
                return 0
            _logger.info(
                "Migrated %s entries for user %s", len(local_entries), resolved.id
            )

        self.storage.set(_migration_key(resolved), "true")
        return len(local_entries)


def _migration_key(user: UserRecord) -> str:
    return f"{MIGRATION_KEY_PREFIX}{user.id}"
