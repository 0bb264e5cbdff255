"""Domain models for the diet tracker."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents the authenticated user."""

    id: UUID
    email: str | None = None
