"""Wires authentication changes to migration and offline sync."""

from collections.abc import Callable
from dataclasses import dataclass

from diet_tracker.domain.models import UserRecord
from diet_tracker.services.connectivity import ConnectivityWatcher
from diet_tracker.services.events import EventBus
from diet_tracker.services.identity import IdentityProvider
from diet_tracker.services.migration import MigrationService
from diet_tracker.services.sync import MutationRecorder


@dataclass
class SessionLifecycle:
    """Starts the per-session sync machinery.

    Each authenticated session runs the one-time migration, then replays
    mutations queued before sign-in.
    """

    identity: IdentityProvider
    migration: MigrationService
    watcher: ConnectivityWatcher
    recorder: MutationRecorder
    events: EventBus

    def start(self) -> Callable[[], None]:
        """Migrate a restored session, start listeners, return a cleanup."""
        current = self.identity.get_current_user()
        if current is not None:
            self._on_session_change(current)
        unsubscribe_session = self.identity.on_session_change(self._on_session_change)
        stop_watcher = self.watcher.register()
        stop_recorder = self.recorder.register(self.events)

        def cleanup() -> None:
            unsubscribe_session()
            stop_watcher()
            stop_recorder()

        return cleanup

    def _on_session_change(self, user: UserRecord | None) -> None:
        if user is None:
            return
        self.migration.migrate(user)
        self.watcher.sync_if_online()
