"""Local-first store for food entries and user targets."""

import logging
from dataclasses import dataclass, fields, replace
from datetime import timedelta
from uuid import uuid4

from diet_tracker.domain.entries import (
    DayTotals,
    EntryDraft,
    FoodEntry,
    MacroTotals,
    PeriodSummary,
)
from diet_tracker.domain.targets import UserTargets, WeightEntry, default_targets
from diet_tracker.services.clock import Clock, date_key, display_time
from diet_tracker.services.events import ENTRY_ADDED, ENTRY_DELETED, EventBus
from diet_tracker.services.storage import KeyValueStorage, read_json, write_json

ENTRIES_KEY = "food_entries"
TARGETS_KEY = "user_targets"

_TARGET_FIELDS = frozenset(field.name for field in fields(UserTargets))

_logger = logging.getLogger(__name__)


@dataclass
class EntryStore:
    """CRUD and aggregation for food entries against local storage."""

    storage: KeyValueStorage
    events: EventBus
    clock: Clock

    def get_all_entries(self) -> list[FoodEntry]:
        """Return every stored entry in insertion order."""
        rows = read_json(self.storage, ENTRIES_KEY, [])
        return [entry_from_row(row) for row in rows]

    def add_entry(self, draft: EntryDraft) -> FoodEntry:
        """Stamp, persist and announce a new entry."""
        now = self.clock.now()
        entry = FoodEntry(
            id=uuid4().hex,
            name=draft.name,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fats=draft.fats,
            meal_type=draft.meal_type,
            timestamp=display_time(now),
            date=date_key(now),
        )
        entries = self.get_all_entries()
        entries.append(entry)
        self._save_entries(entries)
        _logger.debug("Added entry %s for %s", entry.id, entry.date)
        self.events.publish(ENTRY_ADDED, entry)
        return entry

    def delete_entry(self, entry_id: str) -> None:
        """Remove an entry by id; unknown ids are ignored."""
        entries = [entry for entry in self.get_all_entries() if entry.id != entry_id]
        self._save_entries(entries)
        self.events.publish(ENTRY_DELETED, entry_id)

    def get_todays_entries(self) -> list[FoodEntry]:
        """Return entries logged today."""
        today = date_key(self.clock.now())
        return [entry for entry in self.get_all_entries() if entry.date == today]

    def get_entries_for_date_range(self, start: str, end: str) -> list[FoodEntry]:
        """Return entries whose date key falls within [start, end]."""
        return [
            entry
            for entry in self.get_all_entries()
            if start <= entry.date <= end
        ]

    def get_todays_totals(self) -> MacroTotals:
        """Return today's summed macros."""
        return _sum_entries(self.get_todays_entries())

    def get_totals_for_range(self, start: str, end: str) -> MacroTotals:
        """Return summed macros for entries within [start, end]."""
        return _sum_entries(self.get_entries_for_date_range(start, end))

    def get_daily_totals_for_range(self, days: int) -> list[DayTotals]:
        """Return one total per day for the last `days` days, oldest first."""
        today = self.clock.now().date()
        entries = self.get_all_entries()
        result: list[DayTotals] = []
        for offset in range(days - 1, -1, -1):
            day = (today - timedelta(days=offset)).isoformat()
            totals = _sum_entries([entry for entry in entries if entry.date == day])
            result.append(DayTotals(date=day, totals=totals))
        return result

    def get_period_summary(self, days: int = 7) -> PeriodSummary:
        """Return daily totals and averages for the last `days` days."""
        daily = self.get_daily_totals_for_range(days)
        total_days = max(len(daily), 1)
        totals = _sum_totals([day.totals for day in daily])
        return PeriodSummary(
            daily=daily,
            avg_calories=totals.calories / total_days,
            avg_protein=totals.protein / total_days,
            avg_carbs=totals.carbs / total_days,
            avg_fats=totals.fats / total_days,
        )

    def get_targets(self) -> UserTargets:
        """Return stored targets, completed from defaults."""
        row = read_json(self.storage, TARGETS_KEY, None)
        if row is None:
            return default_targets()
        return targets_from_row(row)

    def update_targets(self, **changes: object) -> UserTargets:
        """Merge changes into the stored targets and persist them."""
        unknown = set(changes) - _TARGET_FIELDS
        if unknown:
            raise ValueError(f"Unknown target fields: {', '.join(sorted(unknown))}")
        updated = replace(self.get_targets(), **changes)
        write_json(self.storage, TARGETS_KEY, targets_to_row(updated))
        return updated

    def log_weight(self, weight: float) -> UserTargets:
        """Record today's weight, replacing any earlier value for today."""
        targets = self.get_targets()
        today = date_key(self.clock.now())
        history = [entry for entry in targets.weight_history if entry.date != today]
        history.append(WeightEntry(date=today, weight=weight))
        history.sort(key=lambda entry: entry.date)
        return self.update_targets(current_weight=weight, weight_history=history)

    def get_remaining_macros(self) -> MacroTotals:
        """Return what is left of today's targets, never below zero."""
        targets = self.get_targets()
        totals = self.get_todays_totals()
        return MacroTotals(
            calories=max(0, targets.calories - totals.calories),
            protein=max(0, targets.protein - totals.protein),
            carbs=max(0, targets.carbs - totals.carbs),
            fats=max(0, targets.fats - totals.fats),
        )

    def _save_entries(self, entries: list[FoodEntry]) -> None:
        write_json(self.storage, ENTRIES_KEY, [entry_to_row(e) for e in entries])


def entry_to_row(entry: FoodEntry) -> dict[str, object]:
    """Serialize an entry for storage."""
    return {
        "id": entry.id,
        "name": entry.name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fats": entry.fats,
        "mealType": entry.meal_type,
        "timestamp": entry.timestamp,
        "date": entry.date,
    }


def entry_from_row(row: dict[str, object]) -> FoodEntry:
    """Deserialize a stored entry."""
    return FoodEntry(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=row.get("calories", 0),
        protein=row.get("protein", 0),
        carbs=row.get("carbs", 0),
        fats=row.get("fats", 0),
        meal_type=row.get("mealType", "snack"),
        timestamp=str(row.get("timestamp", "")),
        date=str(row.get("date", "")),
    )


def targets_to_row(targets: UserTargets) -> dict[str, object]:
    """Serialize targets for storage."""
    return {
        "calories": targets.calories,
        "protein": targets.protein,
        "carbs": targets.carbs,
        "fats": targets.fats,
        "currentWeight": targets.current_weight,
        "goalWeight": targets.goal_weight,
        "weightHistory": [
            {"date": entry.date, "weight": entry.weight}
            for entry in targets.weight_history
        ],
    }


def targets_from_row(row: dict[str, object]) -> UserTargets:
    """Deserialize stored targets, filling missing fields from defaults."""
    defaults = default_targets()
    history = row.get("weightHistory") or []
    return UserTargets(
        calories=row.get("calories", defaults.calories),
        protein=row.get("protein", defaults.protein),
        carbs=row.get("carbs", defaults.carbs),
        fats=row.get("fats", defaults.fats),
        current_weight=row.get("currentWeight", defaults.current_weight),
        goal_weight=row.get("goalWeight", defaults.goal_weight),
        weight_history=[
            WeightEntry(date=str(item["date"]), weight=item["weight"])
            for item in history
        ],
    )


def _sum_entries(entries: list[FoodEntry]) -> MacroTotals:
    total = MacroTotals()
    for entry in entries:
        total = MacroTotals(
            calories=total.calories + entry.calories,
            protein=total.protein + entry.protein,
            carbs=total.carbs + entry.carbs,
            fats=total.fats + entry.fats,
        )
    return total


def _sum_totals(items: list[MacroTotals]) -> MacroTotals:
    total = MacroTotals()
    for item in items:
        total = MacroTotals(
            calories=total.calories + item.calories,
            protein=total.protein + item.protein,
            carbs=total.carbs + item.carbs,
            fats=total.fats + item.fats,
        )
    return total
