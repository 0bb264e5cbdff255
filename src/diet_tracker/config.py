"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from diet_tracker.domain.sync import SyncFailurePolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "low"
    openai_store: bool = False
    open_food_facts_base_url: str = "https://world.openfoodfacts.org"
    open_food_facts_user_agent: str = "DietTracker/0.1"
    local_storage_path: str = "~/.diet_tracker/storage.json"
    timezone: str = "UTC"
    sync_failure_policy: str = SyncFailurePolicy.CLEAR_ALWAYS.value
    connectivity_probe_interval_seconds: float = 30.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_sync_failure_policy(raw: str | None) -> SyncFailurePolicy:
    """Parse the sync failure policy, defaulting to clearing the queue."""
    if raw is None:
        return SyncFailurePolicy.CLEAR_ALWAYS
    cleaned = raw.strip().lower().replace("-", "_")
    if not cleaned:
        return SyncFailurePolicy.CLEAR_ALWAYS
    try:
        return SyncFailurePolicy(cleaned)
    except ValueError as exc:
        raise ValueError(f"Unknown sync failure policy: {raw!r}") from exc
