"""Endpoints for food entries, totals and targets."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from diet_tracker.api.models import EntryCreate, TargetsUpdate, WeightLog
from diet_tracker.domain.entries import EntryDraft

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(tags=["entries"])


@router.get("/entries")
async def list_entries(
    request: Request, start: str | None = None, end: str | None = None
) -> dict[str, object]:
    """Return today's entries, or entries within [start, end]."""
    container: AppContainer = request.app.state.container
    store = container.entry_store
    if start and end:
        entries = store.get_entries_for_date_range(start, end)
    else:
        entries = store.get_todays_entries()
    return {"entries": [asdict(entry) for entry in entries]}


@router.post("/entries", status_code=201)
async def create_entry(payload: EntryCreate, request: Request) -> dict[str, object]:
    """Log a food entry locally."""
    container: AppContainer = request.app.state.container
    entry = container.entry_store.add_entry(EntryDraft(**payload.model_dump()))
    return asdict(entry)


@router.delete("/entries/{entry_id}")
async def delete_entry(entry_id: str, request: Request) -> dict[str, str]:
    """Delete a food entry."""
    container: AppContainer = request.app.state.container
    container.entry_store.delete_entry(entry_id)
    return {"status": "ok"}


@router.get("/totals/today")
async def todays_totals(request: Request) -> dict[str, object]:
    """Return today's totals and what remains of the targets."""
    container: AppContainer = request.app.state.container
    store = container.entry_store
    return {
        "totals": asdict(store.get_todays_totals()),
        "remaining": asdict(store.get_remaining_macros()),
    }


@router.get("/totals/range")
async def range_totals(start: str, end: str, request: Request) -> dict[str, object]:
    """Return summed macros for entries within [start, end]."""
    container: AppContainer = request.app.state.container
    return asdict(container.entry_store.get_totals_for_range(start, end))


@router.get("/totals/daily")
async def daily_totals(request: Request, days: int = 7) -> dict[str, object]:
    """Return per-day totals and averages for chart ranges."""
    container: AppContainer = request.app.state.container
    return asdict(container.entry_store.get_period_summary(max(days, 1)))


@router.get("/targets")
async def get_targets(request: Request) -> dict[str, object]:
    """Return the user's targets."""
    container: AppContainer = request.app.state.container
    return asdict(container.entry_store.get_targets())


@router.patch("/targets")
async def update_targets(payload: TargetsUpdate, request: Request) -> dict[str, object]:
    """Merge target changes."""
    container: AppContainer = request.app.state.container
    changes = payload.model_dump(exclude_none=True)
    return asdict(container.entry_store.update_targets(**changes))


@router.post("/weight")
async def log_weight(payload: WeightLog, request: Request) -> dict[str, object]:
    """Record today's weight."""
    container: AppContainer = request.app.state.container
    return asdict(container.entry_store.log_weight(payload.weight))
