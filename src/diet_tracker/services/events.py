"""Synchronous notification bus for store changes."""

from collections.abc import Callable
from dataclasses import dataclass

ENTRY_ADDED = "entry_added"
ENTRY_DELETED = "entry_deleted"
SYNC_COMPLETED = "sync_completed"
RECIPE_SAVED = "recipe_saved"
RECIPE_DELETED = "recipe_deleted"
PLAN_UPDATED = "plan_updated"

Listener = Callable[[object], None]


@dataclass
class EventBus:
    """Fire-and-forget broadcast to listeners registered per event type.

    Listeners run synchronously in registration order. Events published
    before a listener subscribes are not replayed to it.
    """

    _listeners: dict[str, list[Listener]]

    def __init__(self) -> None:
        self._listeners = {}

    def subscribe(self, event_type: str, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.setdefault(event_type, []).append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(event_type, listener)

        return unsubscribe

    def unsubscribe(self, event_type: str, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def publish(self, event_type: str, payload: object = None) -> None:
        """Deliver a payload to every listener of the event type."""
        for listener in list(self._listeners.get(event_type, [])):
            listener(payload)
