"""Domain models for saved recipes."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ingredient:
    """Recipe ingredient with quantity and grocery category."""

    item: str
    qty: str
    category: str


@dataclass(frozen=True)
class RecipeDraft:
    """Recipe fields supplied by the caller."""

    name: str
    description: str
    calories: float
    protein: float
    carbs: float
    fats: float
    tags: list[str] = field(default_factory=list)
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SavedRecipe:
    """Recipe persisted in local storage."""

    id: str
    name: str
    description: str
    calories: float
    protein: float
    carbs: float
    fats: float
    tags: list[str]
    ingredients: list[Ingredient]
    instructions: list[str]
    timestamp: str
    is_custom: bool
