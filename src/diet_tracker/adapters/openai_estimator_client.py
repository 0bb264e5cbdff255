"""OpenAI Responses API client for macro estimation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from diet_tracker.services.estimation import FoodEstimatorClient

SCHEMA_NAME = "food_estimate"


@dataclass
class OpenAIEstimatorClient(FoodEstimatorClient):
    """Estimator backed by OpenAI Responses API structured outputs."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIEstimatorClient":
        """Create an estimator with its own OpenAI session."""
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Request a schema-constrained estimate for a prompt and optional photo."""
        options: dict[str, object] = {"store": store}
        if reasoning_effort:
            options["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(
            model=model,
            input=[_user_message(prompt, image_data_url)],
            text={
                "format": {
                    "type": "json_schema",
                    "name": SCHEMA_NAME,
                    "strict": True,
                    "schema": schema,
                }
            },
            **options,
        )
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty estimate")
        try:
            return json.loads(response.output_text)
        except json.JSONDecodeError as exc:
            raise RuntimeError("OpenAI returned a malformed estimate") from exc

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()


def _user_message(prompt: str, image_data_url: str | None) -> dict[str, object]:
    content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
    if image_data_url:
        content.append({"type": "input_image", "image_url": image_data_url})
    return {"role": "user", "content": content}
