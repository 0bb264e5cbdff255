"""Open Food Facts product API client."""

from dataclasses import dataclass

import httpx

from diet_tracker.services.barcode import BarcodeClient


@dataclass
class HttpxOpenFoodFactsClient(BarcodeClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, user_agent: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url, user_agent=user_agent, http_client=httpx.AsyncClient()
        )

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Return the product payload for a barcode, or None if unknown."""
        url = f"{self.base_url}/api/v0/product/{barcode}.json"
        response = await self.http_client.get(
            url,
            headers={"User-Agent": self.user_agent},
            timeout=15,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        payload = response.json()
        if payload.get("status") != 1 or not payload.get("product"):
            return None
        return payload["product"]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
