"""Endpoints for sync, connectivity reports and authentication."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from diet_tracker.api.models import ConnectivityStatus, Credentials, WorkerMessage
from diet_tracker.services.identity import AuthenticationError

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(tags=["sync"])


@router.get("/sync/pending")
async def pending_sync(request: Request) -> dict[str, object]:
    """Return the number of queued mutations."""
    container: AppContainer = request.app.state.container
    return {"pending": len(container.sync_queue.pending())}


@router.post("/sync")
async def drain_sync(request: Request) -> dict[str, object]:
    """Replay queued mutations now."""
    container: AppContainer = request.app.state.container
    return asdict(container.connectivity_watcher.handle_online())


@router.post("/connectivity")
async def report_connectivity(
    payload: ConnectivityStatus, request: Request
) -> dict[str, object]:
    """Record a client's online state."""
    container: AppContainer = request.app.state.container
    container.connectivity_signals.set_online(payload.online)
    return {"online": container.connectivity_signals.is_online()}


@router.post("/connectivity/messages")
async def post_worker_message(
    payload: WorkerMessage, request: Request
) -> dict[str, str]:
    """Forward a background worker message, such as a sync request."""
    container: AppContainer = request.app.state.container
    container.connectivity_signals.post_message(payload.model_dump())
    return {"status": "ok"}


@router.get("/auth/me")
async def current_user(request: Request) -> dict[str, object]:
    """Return the signed-in user, if any."""
    container: AppContainer = request.app.state.container
    user = container.identity_provider.get_current_user()
    return {"user": asdict(user) if user else None}


@router.post("/auth/sign-in")
async def sign_in(payload: Credentials, request: Request) -> dict[str, object]:
    """Sign in; session listeners run the one-time migration."""
    container: AppContainer = request.app.state.container
    try:
        user = container.identity_provider.sign_in(payload.email, payload.password)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc
    return {"user": asdict(user)}


@router.post("/auth/sign-up")
async def sign_up(payload: Credentials, request: Request) -> dict[str, object]:
    """Register a new account."""
    container: AppContainer = request.app.state.container
    try:
        user = container.identity_provider.sign_up(payload.email, payload.password)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"user": asdict(user) if user else None, "confirmed": user is not None}


@router.post("/auth/sign-out")
async def sign_out(request: Request) -> dict[str, str]:
    """End the current session."""
    container: AppContainer = request.app.state.container
    container.identity_provider.sign_out()
    return {"status": "ok"}
