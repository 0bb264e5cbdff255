"""Macro estimation from food descriptions and photos using LLMs."""

import base64
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.estimates import FoodEstimate

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fats": {"type": "number", "minimum": 0},
        "confidence": {"type": "string", "enum": ["high", "medium", "low"]},
    },
    "required": ["name", "calories", "protein", "carbs", "fats", "confidence"],
    "additionalProperties": False,
}

_TEXT_PROMPT = (
    "You are a nutrition expert. Estimate calories and grams of protein, "
    "carbs and fats for the food described below. Use the quantity given, "
    "otherwise assume a typical serving. Round to whole numbers.\n\nFood: {query}"
)

_PHOTO_PROMPT = (
    "Analyze this food image and estimate its total calories and grams of "
    "protein, carbs and fats. Be realistic about portion sizes. If the food "
    "is unclear, give your best estimate with low confidence."
)


class FoodEstimatorClient(Protocol):
    """Interface for LLM macro estimation."""

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return structured estimate data."""


@dataclass
class FoodEstimationService:
    """Builds estimation prompts and validates results."""

    client: FoodEstimatorClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def estimate_text(self, query: str) -> FoodEstimate:
        """Estimate macros for a free-text food description."""
        raw = await self.client.estimate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=_TEXT_PROMPT.format(query=query),
            schema=ESTIMATE_SCHEMA,
        )
        return FoodEstimate.model_validate(raw)

    async def estimate_photo(self, image_bytes: bytes) -> FoodEstimate:
        """Estimate macros for a meal photo."""
        raw = await self.client.estimate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=_PHOTO_PROMPT,
            schema=ESTIMATE_SCHEMA,
            image_data_url=_to_data_url(image_bytes),
        )
        return FoodEstimate.model_validate(raw)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
