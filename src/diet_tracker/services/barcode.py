"""Barcode product lookups."""

from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.estimates import BarcodeProduct
from diet_tracker.services.cache import Cache


class BarcodeClient(Protocol):
    """Interface for product database lookups."""

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Return the raw product payload, or None when unknown."""


@dataclass
class BarcodeService:
    """Resolves barcodes to per-100g macros with caching."""

    client: BarcodeClient
    cache: Cache
    ttl_seconds: int = 86400

    async def lookup(self, barcode: str) -> BarcodeProduct | None:
        """Return product macros for a barcode, or None when not found."""
        cache_key = f"barcode:{barcode}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, BarcodeProduct):
            return cached

        product = await self.client.get_product(barcode)
        if product is None:
            return None
        nutriments = product.get("nutriments") or {}
        result = BarcodeProduct(
            barcode=barcode,
            name=str(product.get("product_name") or "Unknown Product"),
            serving_size=str(product.get("serving_size") or "100g"),
            calories=_rounded(nutriments.get("energy-kcal_100g")),
            protein=_rounded(nutriments.get("proteins_100g")),
            carbs=_rounded(nutriments.get("carbohydrates_100g")),
            fats=_rounded(nutriments.get("fat_100g")),
        )
        self.cache.set(cache_key, result, ttl_seconds=self.ttl_seconds)
        return result


def _rounded(value: object) -> float:
    if isinstance(value, int | float):
        return float(round(value))
    if isinstance(value, str):
        try:
            return float(round(float(value)))
        except ValueError:
            return 0.0
    return 0.0
