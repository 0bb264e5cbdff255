"""Endpoints for saved recipes and the meal plan."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import TYPE_CHECKING
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Request, status

from diet_tracker.api.models import PlannedMealCreate, RecipeCreate, RecipeLog
from diet_tracker.domain.entries import EntryDraft
from diet_tracker.domain.plans import PlannedMeal
from diet_tracker.domain.recipes import Ingredient, RecipeDraft

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(tags=["planning"])


@router.get("/recipes")
async def list_recipes(request: Request) -> dict[str, object]:
    """Return saved recipes."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_store.get_saved_recipes()
    return {"recipes": [asdict(recipe) for recipe in recipes]}


@router.get("/recipes/{recipe_id}")
async def get_recipe(recipe_id: str, request: Request) -> dict[str, object]:
    """Return a saved recipe."""
    container: AppContainer = request.app.state.container
    recipe = container.recipe_store.get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return asdict(recipe)


@router.post("/recipes", status_code=201)
async def save_recipe(payload: RecipeCreate, request: Request) -> dict[str, object]:
    """Save a recipe."""
    container: AppContainer = request.app.state.container
    draft = RecipeDraft(
        name=payload.name,
        description=payload.description,
        calories=payload.calories,
        protein=payload.protein,
        carbs=payload.carbs,
        fats=payload.fats,
        tags=payload.tags,
        ingredients=[Ingredient(**item.model_dump()) for item in payload.ingredients],
        instructions=payload.instructions,
    )
    return asdict(container.recipe_store.save_recipe(draft))


@router.delete("/recipes/{recipe_id}")
async def delete_recipe(recipe_id: str, request: Request) -> dict[str, str]:
    """Delete a saved recipe."""
    container: AppContainer = request.app.state.container
    container.recipe_store.delete_recipe(recipe_id)
    return {"status": "ok"}


@router.post("/recipes/{recipe_id}/log", status_code=201)
async def log_recipe(
    recipe_id: str, payload: RecipeLog, request: Request
) -> dict[str, object]:
    """Log a saved recipe as a food entry."""
    container: AppContainer = request.app.state.container
    recipe = container.recipe_store.get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    entry = container.entry_store.add_entry(
        EntryDraft(
            name=recipe.name,
            calories=recipe.calories,
            protein=recipe.protein,
            carbs=recipe.carbs,
            fats=recipe.fats,
            meal_type=payload.meal_type,
        )
    )
    return asdict(entry)


@router.get("/plan")
async def get_plan(request: Request) -> dict[str, object]:
    """Return planned meals keyed by date."""
    container: AppContainer = request.app.state.container
    plan = container.plan_store.get_plan()
    return {
        "plan": {day: [asdict(meal) for meal in meals] for day, meals in plan.items()}
    }


@router.post("/plan/{day}/meals", status_code=201)
async def add_planned_meal(
    day: date, payload: PlannedMealCreate, request: Request
) -> dict[str, object]:
    """Add a meal to a plan date."""
    container: AppContainer = request.app.state.container
    meal = PlannedMeal(
        id=payload.id or uuid4().hex[:9],
        name=payload.name,
        type=payload.type,
        ingredients=payload.ingredients,
    )
    container.plan_store.add_meal_to_plan(day.isoformat(), meal)
    return asdict(meal)


@router.delete("/plan/{day}/meals/{meal_id}")
async def remove_planned_meal(
    day: date, meal_id: str, request: Request
) -> dict[str, str]:
    """Remove a meal from a plan date."""
    container: AppContainer = request.app.state.container
    container.plan_store.remove_meal_from_plan(day.isoformat(), meal_id)
    return {"status": "ok"}


@router.get("/plan/grocery-list")
async def grocery_list(
    start: date, request: Request, days: int = 7
) -> dict[str, object]:
    """Return the grocery list for planned meals from `start`."""
    container: AppContainer = request.app.state.container
    items = container.plan_store.generate_grocery_list(start.isoformat(), days)
    return {"items": items}
