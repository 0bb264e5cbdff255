"""Models for AI macro estimates and barcode lookups."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

from diet_tracker.domain.entries import EntryDraft, MealType


class FoodEstimate(BaseModel):
    """Structured output for a macro estimate."""

    name: str
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)
    confidence: Literal["high", "medium", "low"]

    def to_draft(self, meal_type: MealType) -> EntryDraft:
        """Build an entry draft from the estimate."""
        return EntryDraft(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            meal_type=meal_type,
        )


@dataclass(frozen=True)
class BarcodeProduct:
    """Packaged product macros per 100g."""

    barcode: str
    name: str
    serving_size: str
    calories: float
    protein: float
    carbs: float
    fats: float

    def to_draft(self, meal_type: MealType) -> EntryDraft:
        """Build an entry draft from the product."""
        return EntryDraft(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            meal_type=meal_type,
        )
