"""Domain models for food log entries."""

from dataclasses import dataclass, field
from typing import Literal

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


@dataclass(frozen=True)
class EntryDraft:
    """Caller-supplied fields of a food entry."""

    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    meal_type: MealType = "snack"


@dataclass(frozen=True)
class FoodEntry:
    """A logged food item with its macro breakdown."""

    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    meal_type: MealType
    timestamp: str
    date: str


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories, protein, carbs and fats."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0


@dataclass(frozen=True)
class DayTotals:
    """Macro totals for a single date key."""

    date: str
    totals: MacroTotals


@dataclass(frozen=True)
class PeriodSummary:
    """Daily totals and per-day averages over a period."""

    daily: list[DayTotals] = field(default_factory=list)
    avg_calories: float = 0.0
    avg_protein: float = 0.0
    avg_carbs: float = 0.0
    avg_fats: float = 0.0
