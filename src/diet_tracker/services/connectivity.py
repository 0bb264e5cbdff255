"""Connectivity signals and the watcher that drains the sync queue."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from diet_tracker.domain.sync import SyncResult
from diet_tracker.services.events import SYNC_COMPLETED, EventBus
from diet_tracker.services.sync import SyncQueue

SYNC_REQUESTED = "SYNC_REQUESTED"

OnlineListener = Callable[[], None]
MessageListener = Callable[[dict[str, object]], None]

_logger = logging.getLogger(__name__)


@dataclass
class ConnectivitySignals:
    """Online state plus an out-of-band message channel."""

    online: bool = True
    _online_listeners: list[OnlineListener] = field(default_factory=list)
    _message_listeners: list[MessageListener] = field(default_factory=list)

    def is_online(self) -> bool:
        """Return the last reported connectivity state."""
        return self.online

    def set_online(self, online: bool) -> None:
        """Record connectivity; listeners fire only on an offline to online change."""
        was_online = self.online
        self.online = online
        if online and not was_online:
            for listener in list(self._online_listeners):
                listener()

    def post_message(self, message: dict[str, object]) -> None:
        """Deliver a background worker message to listeners."""
        for listener in list(self._message_listeners):
            listener(message)

    def add_online_listener(self, listener: OnlineListener) -> None:
        """Register a listener for online transitions."""
        self._online_listeners.append(listener)

    def remove_online_listener(self, listener: OnlineListener) -> None:
        """Remove an online listener."""
        if listener in self._online_listeners:
            self._online_listeners.remove(listener)

    def add_message_listener(self, listener: MessageListener) -> None:
        """Register a listener for worker messages."""
        self._message_listeners.append(listener)

    def remove_message_listener(self, listener: MessageListener) -> None:
        """Remove a message listener."""
        if listener in self._message_listeners:
            self._message_listeners.remove(listener)


@dataclass
class ConnectivityWatcher:
    """Drains the sync queue when connectivity returns or a sync is requested."""

    signals: ConnectivitySignals
    queue: SyncQueue
    events: EventBus

    def register(self) -> Callable[[], None]:
        """Start listening and return a callable that stops both listeners."""
        self.signals.add_online_listener(self.handle_online)
        self.signals.add_message_listener(self.handle_message)

        def cleanup() -> None:
            self.signals.remove_online_listener(self.handle_online)
            self.signals.remove_message_listener(self.handle_message)

        return cleanup

    def handle_online(self) -> SyncResult:
        """Drain pending items and announce a completed sync."""
        _logger.info("Back online, syncing pending entries")
        result = self.queue.drain()
        if result.synced > 0:
            _logger.info("Synced %s entries", result.synced)
            self.events.publish(SYNC_COMPLETED, result)
        return result

    def sync_if_online(self) -> SyncResult | None:
        """Drain now when connectivity is up; otherwise wait for a transition."""
        if not self.signals.is_online():
            return None
        return self.handle_online()

    def handle_message(self, message: dict[str, object]) -> None:
        """Treat a sync request message like an online transition."""
        if message.get("type") == SYNC_REQUESTED:
            self.handle_online()


class ConnectivityProbe(Protocol):
    """Checks whether the remote store is reachable."""

    async def check(self) -> bool:
        """Return True when the remote store answers."""


@dataclass
class ConnectivityMonitor:
    """Polls a probe and feeds the result into the connectivity signals."""

    probe: ConnectivityProbe
    signals: ConnectivitySignals
    interval_seconds: float = 30.0

    async def check_once(self) -> bool:
        """Probe once and record the result."""
        online = await self.probe.check()
        if online != self.signals.is_online():
            _logger.info("Connectivity changed: online=%s", online)
        self.signals.set_online(online)
        return online

    async def run(self) -> None:
        """Probe forever at the configured interval."""
        while True:
            try:
                await self.check_once()
            except Exception:
                _logger.exception("Connectivity check failed")
            await asyncio.sleep(self.interval_seconds)
