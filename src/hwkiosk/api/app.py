"""
FastAPI Application Factory & Configuration.

This module builds the HTTP surface the kiosk panel talks to. It is
responsible for:
1.  **Lifecycle**: collecting the boot snapshot on startup.
2.  **Middleware Setup**: CORS so a locally served panel page can call us.
3.  **Exception Handling**: unexpected errors still come back as JSON.
4.  **Routing**: mounting the system, diagnostics and control routers.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). Tests pass their own
`AppContext` (fake runner, temp export dir) and get an isolated app; the
server module calls it with no arguments to use the process-wide context.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hwkiosk import __version__
from hwkiosk.api.routers import control, diagnostics, system
from hwkiosk.api.schemas import HealthPayload
from hwkiosk.core.context import AppContext, get_context
from hwkiosk.core.settings import get_logger

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: collect the boot snapshot so the first panel request is
      served from memory. Probes spawn subprocesses, so this runs in a worker
      thread.
    - **Shutdown**: nothing to release; the snapshot lives in memory only.
    """
    context: AppContext = app.state.context
    log.info("hwkiosk API starting up")
    await run_in_threadpool(context.initialize)
    yield
    log.info("hwkiosk API shutting down")


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Construct and configure the kiosk FastAPI application.

    Parameters
    ----------
    context:
        Application context to serve. Defaults to the process-wide instance.
    """
    app = FastAPI(
        title="hwkiosk API",
        description="Hardware inventory and diagnostics for the kiosk panel",
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.context = context if context is not None else get_context()

    # The panel is served from the same machine (file:// or localhost).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Return structured JSON instead of a bare 500 page."""
        log.error("Unhandled error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    app.include_router(system.router)
    app.include_router(diagnostics.router)
    app.include_router(control.router)

    @app.get("/health", response_model=HealthPayload, tags=["System"])
    async def health_check() -> HealthPayload:
        """Liveness probe; also reports whether the boot snapshot is ready."""
        ctx: AppContext = app.state.context
        return HealthPayload(
            status="ok",
            environment=ctx.settings.environment,
            version=__version__,
            snapshot_ready=ctx.initialized,
        )

    return app


__all__ = ["create_app"]
