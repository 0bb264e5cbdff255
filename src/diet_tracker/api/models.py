"""Pydantic models for API request payloads."""

from typing import Literal

from pydantic import BaseModel, Field

MealTypeField = Literal["breakfast", "lunch", "dinner", "snack"]


class EntryCreate(BaseModel):
    """New food entry."""

    name: str = Field(min_length=1)
    calories: float
    protein: float
    carbs: float
    fats: float
    meal_type: MealTypeField = "snack"


class TargetsUpdate(BaseModel):
    """Partial update of user targets."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    current_weight: float | None = None
    goal_weight: float | None = None


class WeightLog(BaseModel):
    """Weight logged for today."""

    weight: float = Field(gt=0)


class IngredientPayload(BaseModel):
    """Recipe ingredient."""

    item: str
    qty: str = ""
    category: str = "Pantry"


class RecipeCreate(BaseModel):
    """Recipe to save."""

    name: str = Field(min_length=1)
    description: str = ""
    calories: float
    protein: float
    carbs: float
    fats: float
    tags: list[str] = Field(default_factory=list)
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


class RecipeLog(BaseModel):
    """Meal slot for logging a saved recipe."""

    meal_type: MealTypeField = "dinner"


class PlannedMealCreate(BaseModel):
    """Meal to add to the plan."""

    id: str | None = None
    name: str = Field(min_length=1)
    type: MealTypeField = "dinner"
    ingredients: list[str] = Field(default_factory=list)


class ConnectivityStatus(BaseModel):
    """Connectivity report from a client."""

    online: bool


class WorkerMessage(BaseModel):
    """Background worker message."""

    type: str


class Credentials(BaseModel):
    """Email and password for authentication."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class FoodLookup(BaseModel):
    """Free-text food description to estimate."""

    query: str = Field(min_length=1)


class PhotoAnalysis(BaseModel):
    """Base64-encoded meal photo."""

    image_base64: str = Field(min_length=1)
