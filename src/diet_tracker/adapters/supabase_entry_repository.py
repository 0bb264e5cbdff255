"""Supabase repository for remote food entries."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_tracker.domain.entries import FoodEntry
from diet_tracker.services.sync import RemoteEntryRepository

FOOD_ENTRIES_TABLE = "food_entries"
ENTRY_CONFLICT_COLUMNS = "user_id,client_id"


@dataclass
class SupabaseEntryRepository(RemoteEntryRepository):
    """Supabase implementation for remote entry writes.

    Writes upsert on (user_id, client_id), so replaying an entry that migration
    already uploaded leaves a single row.
    """

    client: Client

    def insert_entry(self, user_id: UUID, entry: FoodEntry) -> None:
        """Insert or refresh one entry row."""
        self.client.table(FOOD_ENTRIES_TABLE).upsert(
            _entry_row(user_id, entry), on_conflict=ENTRY_CONFLICT_COLUMNS
        ).execute()

    def insert_entries(self, user_id: UUID, entries: list[FoodEntry]) -> None:
        """Insert or refresh entry rows in a single request."""
        payload = [_entry_row(user_id, entry) for entry in entries]
        if payload:
            self.client.table(FOOD_ENTRIES_TABLE).upsert(
                payload, on_conflict=ENTRY_CONFLICT_COLUMNS
            ).execute()

    def delete_entry(self, user_id: UUID, entry_id: str) -> None:
        """Delete the row created from a local entry."""
        self.client.table(FOOD_ENTRIES_TABLE).delete().eq("user_id", str(user_id)).eq(
            "client_id", entry_id
        ).execute()


def _entry_row(user_id: UUID, entry: FoodEntry) -> dict[str, object]:
    return {
        "user_id": str(user_id),
        "client_id": entry.id,
        "name": entry.name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fats": entry.fats,
        "date": entry.date,
    }
