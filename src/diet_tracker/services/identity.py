"""Identity provider interface."""

from collections.abc import Callable
from typing import Protocol

from diet_tracker.domain.models import UserRecord

SessionListener = Callable[[UserRecord | None], None]


class AuthenticationError(RuntimeError):
    """Raised when the identity provider rejects credentials."""


class IdentityProvider(Protocol):
    """Source of the authenticated user and session changes."""

    def get_current_user(self) -> UserRecord | None:
        """Return the signed-in user, if any."""

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        """Subscribe to session changes and return an unsubscribe callable."""

    def sign_in(self, email: str, password: str) -> UserRecord:
        """Sign in with email and password."""

    def sign_up(self, email: str, password: str) -> UserRecord | None:
        """Register a user; returns None until the account is confirmed."""

    def sign_out(self) -> None:
        """End the current session."""
