"""Local time helpers."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        """Return the current time."""


@dataclass
class ZoneClock(Clock):
    """Clock reporting wall time in a configured timezone."""

    timezone_name: str = "UTC"

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name))


def date_key(moment: datetime) -> str:
    """Return the ISO date key used to group entries."""
    return moment.date().isoformat()


def display_time(moment: datetime) -> str:
    """Format a time as h:MM AM/PM."""
    return moment.strftime("%I:%M %p").lstrip("0")
