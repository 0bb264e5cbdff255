"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from uuid import UUID

import pytest
from supabase import AuthError

from diet_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from diet_tracker.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from diet_tracker.domain.models import UserRecord
from diet_tracker.services.identity import AuthenticationError
from tests.conftest import make_entry

_USER_ID = UUID("22222222-2222-2222-2222-222222222222")


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    actions: list[str] = field(default_factory=list)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    on_conflict: str = ""

    def upsert(self, payload: object, on_conflict: str = "") -> "FakeTable":
        self.actions.append("upsert")
        self.last_payload = payload
        self.on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self.actions.append("delete")
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def execute(self) -> FakeResponse:
        return FakeResponse(data=[])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


@dataclass
class _User:
    id: str
    email: str | None = None


@dataclass
class _Session:
    user: _User


@dataclass
class _AuthResponse:
    user: _User | None
    session: _Session | None = None


@dataclass
class _Subscription:
    unsubscribed: bool = False

    def unsubscribe(self) -> None:
        self.unsubscribed = True


@dataclass
class FakeAuth:
    session: _Session | None = None
    sign_in_error: Exception | None = None
    confirm_sign_up: bool = False
    callbacks: list[object] = field(default_factory=list)
    subscription: _Subscription = field(default_factory=_Subscription)
    signed_out: bool = False

    def get_session(self) -> _Session | None:
        return self.session

    def on_auth_state_change(self, callback: object) -> _Subscription:
        self.callbacks.append(callback)
        return self.subscription

    def sign_in_with_password(self, credentials: dict[str, str]) -> _AuthResponse:
        if self.sign_in_error is not None:
            raise self.sign_in_error
        user = _User(id=str(_USER_ID), email=credentials["email"])
        self.session = _Session(user=user)
        return _AuthResponse(user=user, session=self.session)

    def sign_up(self, credentials: dict[str, str]) -> _AuthResponse:
        user = _User(id=str(_USER_ID), email=credentials["email"])
        if self.confirm_sign_up:
            return _AuthResponse(user=user, session=_Session(user=user))
        return _AuthResponse(user=user)

    def sign_out(self) -> None:
        self.signed_out = True
        self.session = None


@dataclass
class FakeAuthClient:
    auth: FakeAuth = field(default_factory=FakeAuth)


def test_entry_repository_upserts_tagged_rows() -> None:
    client = FakeSupabaseClient()
    repo = SupabaseEntryRepository(client)

    repo.insert_entry(_USER_ID, make_entry("e1"))

    table = client.tables["food_entries"]
    assert table.last_payload == {
        "user_id": str(_USER_ID),
        "client_id": "e1",
        "name": "Egg",
        "calories": 70,
        "protein": 6,
        "carbs": 0,
        "fats": 5,
        "date": "2024-03-15",
    }
    assert table.on_conflict == "user_id,client_id"


def test_entry_repository_bulk_insert() -> None:
    client = FakeSupabaseClient()
    repo = SupabaseEntryRepository(client)

    repo.insert_entries(_USER_ID, [])
    assert "food_entries" not in client.tables

    repo.insert_entries(_USER_ID, [make_entry("e1"), make_entry("e2")])

    table = client.tables["food_entries"]
    assert [row["client_id"] for row in table.last_payload] == ["e1", "e2"]
    assert table.actions == ["upsert"]
    assert table.on_conflict == "user_id,client_id"


def test_entry_repository_delete_filters_by_user_and_client_id() -> None:
    client = FakeSupabaseClient()
    repo = SupabaseEntryRepository(client)

    repo.delete_entry(_USER_ID, "e1")

    table = client.tables["food_entries"]
    assert table.actions == ["delete"]
    assert table.last_filters == [("user_id", str(_USER_ID)), ("client_id", "e1")]


def test_identity_provider_reads_session() -> None:
    client = FakeAuthClient()
    provider = SupabaseIdentityProvider(client)

    assert provider.get_current_user() is None

    client.auth.session = _Session(user=_User(id=str(_USER_ID), email="a@b.c"))
    assert provider.get_current_user() == UserRecord(id=_USER_ID, email="a@b.c")


def test_identity_provider_forwards_session_changes() -> None:
    client = FakeAuthClient()
    provider = SupabaseIdentityProvider(client)
    seen: list[UserRecord | None] = []

    unsubscribe = provider.on_session_change(seen.append)
    callback = client.auth.callbacks[0]
    callback("SIGNED_IN", _Session(user=_User(id=str(_USER_ID))))
    callback("SIGNED_OUT", None)
    unsubscribe()

    assert seen == [UserRecord(id=_USER_ID), None]
    assert client.auth.subscription.unsubscribed


def test_identity_provider_sign_in_and_out() -> None:
    client = FakeAuthClient()
    provider = SupabaseIdentityProvider(client)

    user = provider.sign_in("a@b.c", "secret")
    provider.sign_out()

    assert user == UserRecord(id=_USER_ID, email="a@b.c")
    assert client.auth.signed_out


def test_identity_provider_sign_in_failure() -> None:
    client = FakeAuthClient()
    client.auth.sign_in_error = AuthError("Invalid login credentials", None)
    provider = SupabaseIdentityProvider(client)

    with pytest.raises(AuthenticationError, match="Invalid login"):
        provider.sign_in("a@b.c", "wrong")


def test_identity_provider_sign_up_requires_confirmation() -> None:
    client = FakeAuthClient()
    provider = SupabaseIdentityProvider(client)

    assert provider.sign_up("a@b.c", "secret") is None

    client.auth.confirm_sign_up = True
    assert provider.sign_up("a@b.c", "secret") == UserRecord(
        id=_USER_ID, email="a@b.c"
    )
