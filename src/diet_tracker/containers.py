"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_tracker.adapters.http_connectivity_probe import HttpxConnectivityProbe
from diet_tracker.adapters.json_file_storage import JsonFileStorage
from diet_tracker.adapters.open_food_facts_client import HttpxOpenFoodFactsClient
from diet_tracker.adapters.openai_estimator_client import OpenAIEstimatorClient
from diet_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from diet_tracker.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from diet_tracker.config import Settings, parse_sync_failure_policy
from diet_tracker.services.barcode import BarcodeService
from diet_tracker.services.cache import LookupCache
from diet_tracker.services.clock import ZoneClock
from diet_tracker.services.connectivity import (
    ConnectivityMonitor,
    ConnectivitySignals,
    ConnectivityWatcher,
)
from diet_tracker.services.entries import EntryStore
from diet_tracker.services.estimation import FoodEstimationService
from diet_tracker.services.events import EventBus
from diet_tracker.services.identity import IdentityProvider
from diet_tracker.services.migration import MigrationService
from diet_tracker.services.plans import PlanStore
from diet_tracker.services.recipes import RecipeStore
from diet_tracker.services.session import SessionLifecycle
from diet_tracker.services.storage import KeyValueStorage
from diet_tracker.services.sync import MutationRecorder, SyncQueue


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: KeyValueStorage
    events: EventBus
    identity_provider: IdentityProvider
    entry_store: EntryStore
    recipe_store: RecipeStore
    plan_store: PlanStore
    sync_queue: SyncQueue
    connectivity_signals: ConnectivitySignals
    connectivity_watcher: ConnectivityWatcher
    connectivity_monitor: ConnectivityMonitor | None
    migration_service: MigrationService
    session_lifecycle: SessionLifecycle
    estimation_service: FoodEstimationService
    barcode_service: BarcodeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    storage = JsonFileStorage.create(resolved_settings.local_storage_path)
    events = EventBus()
    clock = ZoneClock(resolved_settings.timezone)
    identity_provider = SupabaseIdentityProvider(supabase_client)
    remote_repository = SupabaseEntryRepository(supabase_client)

    entry_store = EntryStore(storage=storage, events=events, clock=clock)
    recipe_store = RecipeStore(storage=storage, events=events, clock=clock)
    plan_store = PlanStore(storage=storage, events=events)
    sync_queue = SyncQueue(
        storage=storage,
        identity=identity_provider,
        remote=remote_repository,
        failure_policy=parse_sync_failure_policy(
            resolved_settings.sync_failure_policy
        ),
    )
    signals = ConnectivitySignals()
    watcher = ConnectivityWatcher(signals=signals, queue=sync_queue, events=events)
    probe = HttpxConnectivityProbe.create(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    monitor = None
    if resolved_settings.connectivity_probe_interval_seconds > 0:
        monitor = ConnectivityMonitor(
            probe=probe,
            signals=signals,
            interval_seconds=resolved_settings.connectivity_probe_interval_seconds,
        )
    migration_service = MigrationService(
        storage=storage,
        identity=identity_provider,
        remote=remote_repository,
        entries=entry_store,
    )
    session_lifecycle = SessionLifecycle(
        identity=identity_provider,
        migration=migration_service,
        watcher=watcher,
        recorder=MutationRecorder(queue=sync_queue, is_online=signals.is_online),
        events=events,
    )
    estimator_client = OpenAIEstimatorClient.create(resolved_settings.openai_api_key)
    estimation_service = FoodEstimationService(
        client=estimator_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    barcode_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.open_food_facts_base_url,
        user_agent=resolved_settings.open_food_facts_user_agent,
    )
    barcode_service = BarcodeService(client=barcode_client, cache=LookupCache())

    async def close_resources() -> None:
        await probe.close()
        await barcode_client.close()
        await estimator_client.close()

    return AppContainer(
        settings=resolved_settings,
        storage=storage,
        events=events,
        identity_provider=identity_provider,
        entry_store=entry_store,
        recipe_store=recipe_store,
        plan_store=plan_store,
        sync_queue=sync_queue,
        connectivity_signals=signals,
        connectivity_watcher=watcher,
        connectivity_monitor=monitor,
        migration_service=migration_service,
        session_lifecycle=session_lifecycle,
        estimation_service=estimation_service,
        barcode_service=barcode_service,
        close_resources=close_resources,
    )
