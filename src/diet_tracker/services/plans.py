"""Local store for the weekly meal plan."""

from dataclasses import dataclass
from datetime import date, timedelta

from diet_tracker.domain.plans import PlannedMeal
from diet_tracker.services.events import PLAN_UPDATED, EventBus
from diet_tracker.services.storage import KeyValueStorage, read_json, write_json

PLAN_KEY = "weekly_plan"


@dataclass
class PlanStore:
    """Meals planned per date key."""

    storage: KeyValueStorage
    events: EventBus

    def get_plan(self) -> dict[str, list[PlannedMeal]]:
        """Return planned meals keyed by date."""
        raw = read_json(self.storage, PLAN_KEY, {})
        return {
            day: [_parse_meal(row) for row in meals] for day, meals in raw.items()
        }

    def add_meal_to_plan(self, day: str, meal: PlannedMeal) -> None:
        """Append a meal to the plan for a date."""
        plan = self.get_plan()
        plan.setdefault(day, []).append(meal)
        self._save(plan)
        self.events.publish(PLAN_UPDATED, day)

    def remove_meal_from_plan(self, day: str, meal_id: str) -> None:
        """Remove a meal from a date; dates without meals are left alone."""
        plan = self.get_plan()
        if day not in plan:
            return
        plan[day] = [meal for meal in plan[day] if meal.id != meal_id]
        self._save(plan)
        self.events.publish(PLAN_UPDATED, day)

    def generate_grocery_list(self, start_date: str, days: int = 7) -> list[str]:
        """Return sorted unique ingredients planned within the date window."""
        start = date.fromisoformat(start_date)
        window = {
            (start + timedelta(days=offset)).isoformat() for offset in range(days)
        }
        ingredients: set[str] = set()
        for day, meals in self.get_plan().items():
            if day not in window:
                continue
            for meal in meals:
                ingredients.update(meal.ingredients)
        return sorted(ingredients)

    def _save(self, plan: dict[str, list[PlannedMeal]]) -> None:
        write_json(
            self.storage,
            PLAN_KEY,
            {day: [_meal_row(meal) for meal in meals] for day, meals in plan.items()},
        )


def _meal_row(meal: PlannedMeal) -> dict[str, object]:
    return {
        "id": meal.id,
        "name": meal.name,
        "type": meal.type,
        "ingredients": meal.ingredients,
    }


def _parse_meal(row: dict[str, object]) -> PlannedMeal:
    return PlannedMeal(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        type=row.get("type", "dinner"),
        ingredients=list(row.get("ingredients") or []),
    )
