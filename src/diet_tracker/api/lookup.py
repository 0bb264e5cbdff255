"""Endpoints that turn descriptions, barcodes and photos into macros."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from diet_tracker.api.models import FoodLookup, PhotoAnalysis

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

MAX_IMAGE_BYTES = 5_000_000

router = APIRouter(prefix="/lookup", tags=["lookup"])

_logger = logging.getLogger(__name__)


@router.post("/food")
async def lookup_food(payload: FoodLookup, request: Request) -> dict[str, object]:
    """Estimate macros for a food description."""
    container: AppContainer = request.app.state.container
    try:
        estimate = await container.estimation_service.estimate_text(payload.query)
    except Exception as exc:
        _logger.exception("Food lookup failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to estimate macros",
        ) from exc
    return estimate.model_dump()


@router.post("/photo")
async def analyze_photo(payload: PhotoAnalysis, request: Request) -> dict[str, object]:
    """Estimate macros for a meal photo."""
    container: AppContainer = request.app.state.container
    image_bytes = _decode_image(payload.image_base64)
    try:
        estimate = await container.estimation_service.estimate_photo(image_bytes)
    except Exception as exc:
        _logger.exception("Photo analysis failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to analyze food image",
        ) from exc
    return estimate.model_dump()


@router.get("/barcode/{barcode}")
async def lookup_barcode(barcode: str, request: Request) -> dict[str, object]:
    """Return per-100g macros for a product barcode."""
    container: AppContainer = request.app.state.container
    try:
        product = await container.barcode_service.lookup(barcode)
    except Exception as exc:
        _logger.exception("Barcode lookup failed for %s", barcode)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to lookup product",
        ) from exc
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )
    return asdict(product)


def _decode_image(image_base64: str) -> bytes:
    data = image_base64
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        image_bytes = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid base64 image"
        ) from exc
    if not image_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Empty image"
        )
    if len(image_bytes) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Image too large"
        )
    return image_bytes
