"""Local store for saved recipes."""

from dataclasses import dataclass
from uuid import uuid4

from diet_tracker.domain.recipes import Ingredient, RecipeDraft, SavedRecipe
from diet_tracker.services.clock import Clock
from diet_tracker.services.events import RECIPE_DELETED, RECIPE_SAVED, EventBus
from diet_tracker.services.storage import KeyValueStorage, read_json, write_json

RECIPES_KEY = "saved_recipes"


@dataclass
class RecipeStore:
    """Persists recipes the user saved or generated."""

    storage: KeyValueStorage
    events: EventBus
    clock: Clock

    def get_saved_recipes(self) -> list[SavedRecipe]:
        """Return all saved recipes."""
        rows = read_json(self.storage, RECIPES_KEY, [])
        return [_parse_recipe(row) for row in rows]

    def get_recipe(self, recipe_id: str) -> SavedRecipe | None:
        """Return a saved recipe by id."""
        for recipe in self.get_saved_recipes():
            if recipe.id == recipe_id:
                return recipe
        return None

    def save_recipe(self, draft: RecipeDraft) -> SavedRecipe:
        """Persist a new custom recipe."""
        recipe = SavedRecipe(
            id=f"custom-{uuid4().hex[:12]}",
            name=draft.name,
            description=draft.description,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fats=draft.fats,
            tags=list(draft.tags),
            ingredients=list(draft.ingredients),
            instructions=list(draft.instructions),
            timestamp=self.clock.now().isoformat(),
            is_custom=True,
        )
        recipes = self.get_saved_recipes()
        recipes.append(recipe)
        self._save(recipes)
        self.events.publish(RECIPE_SAVED, recipe)
        return recipe

    def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe; unknown ids are ignored."""
        recipes = [r for r in self.get_saved_recipes() if r.id != recipe_id]
        self._save(recipes)
        self.events.publish(RECIPE_DELETED, recipe_id)

    def _save(self, recipes: list[SavedRecipe]) -> None:
        write_json(self.storage, RECIPES_KEY, [_recipe_row(r) for r in recipes])


def _recipe_row(recipe: SavedRecipe) -> dict[str, object]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "description": recipe.description,
        "calories": recipe.calories,
        "protein": recipe.protein,
        "carbs": recipe.carbs,
        "fats": recipe.fats,
        "tags": recipe.tags,
        "ingredients": [
            {"item": i.item, "qty": i.qty, "category": i.category}
            for i in recipe.ingredients
        ],
        "instructions": recipe.instructions,
        "timestamp": recipe.timestamp,
        "isCustom": recipe.is_custom,
    }


def _parse_recipe(row: dict[str, object]) -> SavedRecipe:
    return SavedRecipe(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        description=str(row.get("description", "")),
        calories=row.get("calories", 0),
        protein=row.get("protein", 0),
        carbs=row.get("carbs", 0),
        fats=row.get("fats", 0),
        tags=list(row.get("tags") or []),
        ingredients=[
            Ingredient(
                item=str(item.get("item", "")),
                qty=str(item.get("qty", "")),
                category=str(item.get("category", "")),
            )
            for item in row.get("ingredients") or []
        ],
        instructions=list(row.get("instructions") or []),
        timestamp=str(row.get("timestamp", "")),
        is_custom=bool(row.get("isCustom", True)),
    )
