"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import pytest

from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer
from diet_tracker.domain.entries import FoodEntry
from diet_tracker.domain.models import UserRecord
from diet_tracker.services.barcode import BarcodeClient, BarcodeService
from diet_tracker.services.cache import LookupCache
from diet_tracker.services.clock import Clock
from diet_tracker.services.connectivity import ConnectivitySignals, ConnectivityWatcher
from diet_tracker.services.entries import EntryStore
from diet_tracker.services.estimation import FoodEstimationService, FoodEstimatorClient
from diet_tracker.services.events import EventBus
from diet_tracker.services.identity import (
    AuthenticationError,
    IdentityProvider,
    SessionListener,
)
from diet_tracker.services.migration import MigrationService
from diet_tracker.services.plans import PlanStore
from diet_tracker.services.recipes import RecipeStore
from diet_tracker.services.session import SessionLifecycle
from diet_tracker.services.storage import InMemoryStorage
from diet_tracker.services.sync import (
    MutationRecorder,
    RemoteEntryRepository,
    SyncQueue,
)


@dataclass
class FixedClock(Clock):
    """Clock that returns a settable moment."""

    moment: datetime = field(
        default_factory=lambda: datetime(
            2024, 3, 15, 8, 5, tzinfo=ZoneInfo("America/New_York")
        )
    )

    def now(self) -> datetime:
        return self.moment


@dataclass
class InMemoryRemoteEntryRepository(RemoteEntryRepository):
    """Remote entry store keyed like the upserting adapter, with failure toggles."""

    rows: list[tuple[UUID, FoodEntry]] = field(default_factory=list)
    deleted: list[tuple[UUID, str]] = field(default_factory=list)
    batches: list[list[FoodEntry]] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)
    fail_batches: bool = False

    def insert_entry(self, user_id: UUID, entry: FoodEntry) -> None:
        if entry.id in self.fail_on:
            raise RuntimeError(f"insert failed for {entry.id}")
        self._upsert(user_id, entry)

    def insert_entries(self, user_id: UUID, entries: list[FoodEntry]) -> None:
        if self.fail_batches:
            raise RuntimeError("bulk insert failed")
        self.batches.append(list(entries))
        for entry in entries:
            self._upsert(user_id, entry)

    def delete_entry(self, user_id: UUID, entry_id: str) -> None:
        if entry_id in self.fail_on:
            raise RuntimeError(f"delete failed for {entry_id}")
        self.deleted.append((user_id, entry_id))

    def _upsert(self, user_id: UUID, entry: FoodEntry) -> None:
        self.rows = [
            row for row in self.rows if (row[0], row[1].id) != (user_id, entry.id)
        ]
        self.rows.append((user_id, entry))


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider with a settable user and session listeners."""

    user: UserRecord | None = None
    password: str = "secret"
    listeners: list[SessionListener] = field(default_factory=list)
    signed_out: bool = False

    def get_current_user(self) -> UserRecord | None:
        return self.user

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def sign_in(self, email: str, password: str) -> UserRecord:
        if password != self.password:
            raise AuthenticationError("Invalid login credentials")
        self.change_user(UserRecord(id=uuid4(), email=email))
        return self.user

    def sign_up(self, email: str, password: str) -> UserRecord | None:
        if "@" not in email:
            raise AuthenticationError("Invalid email")
        return None

    def sign_out(self) -> None:
        self.signed_out = True
        self.change_user(None)

    def change_user(self, user: UserRecord | None) -> None:
        self.user = user
        for listener in list(self.listeners):
            listener(user)


@dataclass
class FakeEstimatorClient(FoodEstimatorClient):
    """Estimator returning a fixed payload and recording calls."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Chicken breast",
            "calories": 165,
            "protein": 31,
            "carbs": 0,
            "fats": 4,
            "confidence": "high",
        }
    )
    calls: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        self.calls.append(
            {"model": model, "prompt": prompt, "image_data_url": image_data_url}
        )
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeBarcodeClient(BarcodeClient):
    """Barcode client serving products from a dict."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "3017620422003": {
                "product_name": "Nutella",
                "serving_size": "15g",
                "nutriments": {
                    "energy-kcal_100g": 539.4,
                    "proteins_100g": 6.3,
                    "carbohydrates_100g": 57.5,
                    "fat_100g": 30.9,
                },
            }
        }
    )
    requests: list[str] = field(default_factory=list)

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        self.requests.append(barcode)
        return self.products.get(barcode)


def make_entry(  # noqa: PLR0913
    entry_id: str = "entry-1",
    name: str = "Egg",
    calories: float = 70,
    protein: float = 6,
    carbs: float = 0,
    fats: float = 5,
    day: str = "2024-03-15",
) -> FoodEntry:
    return FoodEntry(
        id=entry_id,
        name=name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        meal_type="breakfast",
        timestamp="8:05 AM",
        date=day,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="header.payload.signature",
        openai_api_key="openai-key",
        local_storage_path="/tmp/diet-tracker-test/storage.json",
        connectivity_probe_interval_seconds=0,
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def user() -> UserRecord:
    return UserRecord(id=UUID("11111111-1111-1111-1111-111111111111"), email="a@b.c")


@pytest.fixture
def remote() -> InMemoryRemoteEntryRepository:
    return InMemoryRemoteEntryRepository()


@pytest.fixture
def entry_store(
    storage: InMemoryStorage, events: EventBus, clock: FixedClock
) -> EntryStore:
    return EntryStore(storage=storage, events=events, clock=clock)


@pytest.fixture
def sync_queue(
    storage: InMemoryStorage,
    identity: FakeIdentityProvider,
    remote: InMemoryRemoteEntryRepository,
) -> SyncQueue:
    return SyncQueue(storage=storage, identity=identity, remote=remote)


@pytest.fixture
def signals() -> ConnectivitySignals:
    return ConnectivitySignals()


@pytest.fixture
def estimator_client() -> FakeEstimatorClient:
    return FakeEstimatorClient()


@pytest.fixture
def barcode_client() -> FakeBarcodeClient:
    return FakeBarcodeClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    storage: InMemoryStorage,
    events: EventBus,
    clock: FixedClock,
    identity: FakeIdentityProvider,
    remote: InMemoryRemoteEntryRepository,
    entry_store: EntryStore,
    sync_queue: SyncQueue,
    signals: ConnectivitySignals,
    estimator_client: FakeEstimatorClient,
    barcode_client: FakeBarcodeClient,
) -> AppContainer:
    watcher = ConnectivityWatcher(signals=signals, queue=sync_queue, events=events)
    migration_service = MigrationService(
        storage=storage, identity=identity, remote=remote, entries=entry_store
    )
    session_lifecycle = SessionLifecycle(
        identity=identity,
        migration=migration_service,
        watcher=watcher,
        recorder=MutationRecorder(queue=sync_queue, is_online=signals.is_online),
        events=events,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        storage=storage,
        events=events,
        identity_provider=identity,
        entry_store=entry_store,
        recipe_store=RecipeStore(storage=storage, events=events, clock=clock),
        plan_store=PlanStore(storage=storage, events=events),
        sync_queue=sync_queue,
        connectivity_signals=signals,
        connectivity_watcher=watcher,
        connectivity_monitor=None,
        migration_service=migration_service,
        session_lifecycle=session_lifecycle,
        estimation_service=FoodEstimationService(
            client=estimator_client,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        barcode_service=BarcodeService(client=barcode_client, cache=LookupCache()),
        close_resources=close_resources,
    )
