"""Tests for the recipe and meal plan stores."""

from diet_tracker.domain.plans import PlannedMeal
from diet_tracker.domain.recipes import Ingredient, RecipeDraft
from diet_tracker.services.events import (
    PLAN_UPDATED,
    RECIPE_DELETED,
    RECIPE_SAVED,
    EventBus,
)
from diet_tracker.services.plans import PlanStore
from diet_tracker.services.recipes import RecipeStore
from diet_tracker.services.storage import InMemoryStorage
from tests.conftest import FixedClock


def _recipe_draft() -> RecipeDraft:
    return RecipeDraft(
        name="Turkey chili",
        description="High protein chili",
        calories=520,
        protein=48,
        carbs=40,
        fats=14,
        tags=["high-protein"],
        ingredients=[Ingredient(item="Ground turkey", qty="1 lb", category="Meat")],
        instructions=["Brown the turkey", "Simmer"],
    )


def test_save_recipe_assigns_custom_id(
    storage: InMemoryStorage, events: EventBus, clock: FixedClock
) -> None:
    saved: list[object] = []
    events.subscribe(RECIPE_SAVED, saved.append)
    store = RecipeStore(storage=storage, events=events, clock=clock)

    recipe = store.save_recipe(_recipe_draft())

    assert recipe.id.startswith("custom-")
    assert recipe.is_custom is True
    assert recipe.timestamp == clock.moment.isoformat()
    assert saved == [recipe]
    assert store.get_recipe(recipe.id) == recipe
    assert store.get_recipe("custom-missing") is None


def test_recipe_reads_are_repeatable(
    storage: InMemoryStorage, events: EventBus, clock: FixedClock
) -> None:
    store = RecipeStore(storage=storage, events=events, clock=clock)
    store.save_recipe(_recipe_draft())

    assert store.get_saved_recipes() == store.get_saved_recipes()
    assert store.get_saved_recipes()[0].ingredients == [
        Ingredient(item="Ground turkey", qty="1 lb", category="Meat")
    ]


def test_delete_recipe(
    storage: InMemoryStorage, events: EventBus, clock: FixedClock
) -> None:
    deleted: list[object] = []
    events.subscribe(RECIPE_DELETED, deleted.append)
    store = RecipeStore(storage=storage, events=events, clock=clock)
    recipe = store.save_recipe(_recipe_draft())

    store.delete_recipe(recipe.id)

    assert store.get_saved_recipes() == []
    assert deleted == [recipe.id]


def test_plan_add_and_remove_meals(storage: InMemoryStorage, events: EventBus) -> None:
    updates: list[object] = []
    events.subscribe(PLAN_UPDATED, updates.append)
    store = PlanStore(storage=storage, events=events)
    meal = PlannedMeal(id="m1", name="Oats", type="breakfast", ingredients=["Oats"])

    store.add_meal_to_plan("2024-03-18", meal)
    store.remove_meal_from_plan("2024-03-18", "m1")

    assert store.get_plan() == {"2024-03-18": []}
    assert updates == ["2024-03-18", "2024-03-18"]


def test_remove_from_unplanned_day_is_silent(
    storage: InMemoryStorage, events: EventBus
) -> None:
    updates: list[object] = []
    events.subscribe(PLAN_UPDATED, updates.append)
    store = PlanStore(storage=storage, events=events)

    store.remove_meal_from_plan("2024-03-18", "m1")

    assert store.get_plan() == {}
    assert updates == []


def test_grocery_list_is_sorted_unique_and_windowed(
    storage: InMemoryStorage, events: EventBus
) -> None:
    store = PlanStore(storage=storage, events=events)
    store.add_meal_to_plan(
        "2024-03-18",
        PlannedMeal(id="a", name="Omelette", type="breakfast", ingredients=["Eggs"]),
    )
    store.add_meal_to_plan(
        "2024-03-20",
        PlannedMeal(
            id="b", name="Stir fry", type="dinner", ingredients=["Rice", "Eggs"]
        ),
    )
    store.add_meal_to_plan(
        "2024-03-25",
        PlannedMeal(id="c", name="Salmon", type="dinner", ingredients=["Salmon"]),
    )

    assert store.generate_grocery_list("2024-03-18") == ["Eggs", "Rice"]
    assert store.generate_grocery_list("2024-03-18", days=8) == [
        "Eggs",
        "Rice",
        "Salmon",
    ]
    assert store.get_plan() == store.get_plan()
