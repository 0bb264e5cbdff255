"""Domain models for the weekly meal plan."""

from dataclasses import dataclass, field

from diet_tracker.domain.entries import MealType


@dataclass(frozen=True)
class PlannedMeal:
    """A meal scheduled on a plan date."""

    id: str
    name: str
    type: MealType
    ingredients: list[str] = field(default_factory=list)
