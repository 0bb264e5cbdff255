"""Domain models for user targets and weight history."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WeightEntry:
    """Weight logged on a date."""

    date: str
    weight: float


@dataclass(frozen=True)
class UserTargets:
    """Daily macro targets plus weight goal and history."""

    calories: float
    protein: float
    carbs: float
    fats: float
    current_weight: float
    goal_weight: float
    weight_history: list[WeightEntry] = field(default_factory=list)


def default_targets() -> UserTargets:
    """Return the targets used before the user has saved any."""
    return UserTargets(
        calories=2100,
        protein=200,
        carbs=150,
        fats=70,
        current_weight=250,
        goal_weight=205,
        weight_history=[],
    )
