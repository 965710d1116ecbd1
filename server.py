"""
Health-check server: GET / reports liveness and whether a presence baseline exists.
The app's lifespan runs the monitor loop as a background task.
"""
import asyncio
import contextlib
import time
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from logging_setup import get_logger
from monitor import Monitor

_log = get_logger("server")
_STARTED = time.monotonic()


def create_app(monitor: Monitor, user_id: int, run_monitor: bool = True) -> FastAPI:
    """Build the app around *monitor*. With run_monitor=False the loop is not started."""

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        task = None
        if run_monitor:
            task = asyncio.create_task(monitor.run_forever(), name="monitor")
            _log.info("monitor_started", user_id=user_id, interval=monitor.interval)
        try:
            yield
        finally:
            if task is not None:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                _log.info("monitor_stopped", user_id=user_id)

    app = FastAPI(lifespan=lifespan)

    @app.get("/")
    async def index() -> JSONResponse:
        """Liveness only: a poller whose every fetch fails still reports running."""
        return JSONResponse(
            content={
                "status": "running",
                "userId": user_id,
                "lastCheck": "Active" if monitor.state.presence is not None else "Initializing",
                "uptime": time.monotonic() - _STARTED,
            }
        )

    return app
