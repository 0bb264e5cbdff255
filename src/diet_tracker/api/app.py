"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from diet_tracker.api.entries import router as entries_router
from diet_tracker.api.lookup import router as lookup_router
from diet_tracker.api.planning import router as planning_router
from diet_tracker.api.sync import router as sync_router
from diet_tracker.app_logging import configure_logging
from diet_tracker.containers import AppContainer
from diet_tracker.services.storage import StorageError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        stop_session = state_container.session_lifecycle.start()
        monitor_task = None
        if state_container.connectivity_monitor is not None:
            monitor_task = asyncio.create_task(
                state_container.connectivity_monitor.run()
            )
        yield
        if monitor_task is not None:
            monitor_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await monitor_task
        stop_session()
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(entries_router)
    app.include_router(planning_router)
    app.include_router(sync_router)
    app.include_router(lookup_router)

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        _request: Request, exc: StorageError
    ) -> JSONResponse:
        logger.error("Local storage failure: %s", exc)
        return JSONResponse(
            status_code=500, content={"detail": "Local storage failure"}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
