"""Supabase Auth implementation of the identity provider."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from diet_tracker.domain.models import UserRecord
from diet_tracker.services.identity import (
    AuthenticationError,
    IdentityProvider,
    SessionListener,
)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Reads the Supabase Auth session held by the client."""

    client: Client

    def get_current_user(self) -> UserRecord | None:
        """Return the user of the stored session, if any."""
        return _user_from_session(self.client.auth.get_session())

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        """Forward auth state changes as user records."""

        def handle(_event: object, session: object) -> None:
            listener(_user_from_session(session))

        subscription = self.client.auth.on_auth_state_change(handle)
        return subscription.unsubscribe

    def sign_in(self, email: str, password: str) -> UserRecord:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise AuthenticationError(str(exc)) from exc
        if response.user is None:
            raise AuthenticationError("Sign-in returned no user")
        return _user_record(response.user)

    def sign_up(self, email: str, password: str) -> UserRecord | None:
        """Register an account; the user is returned once a session exists."""
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            raise AuthenticationError(str(exc)) from exc
        if response.session is None or response.user is None:
            return None
        return _user_record(response.user)

    def sign_out(self) -> None:
        """End the current session."""
        self.client.auth.sign_out()


def _user_from_session(session: object) -> UserRecord | None:
    user = getattr(session, "user", None)
    if user is None:
        return None
    return _user_record(user)


def _user_record(user: object) -> UserRecord:
    return UserRecord(id=UUID(str(user.id)), email=getattr(user, "email", None))
