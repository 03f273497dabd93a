"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from channelarr import __version__
from channelarr.infrastructure.config import CHANNELS, AppConfig
from channelarr.interfaces.app_state import AppState
from channelarr.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, browser, resolver, scheduler) are created in
    lifespan().
    """
    app = FastAPI(
        title="Channelarr",
        description="Resolves live channel ids to fresh HLS manifest URLs",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from channelarr.interfaces.api.admin.router import router as admin_router
    from channelarr.interfaces.api.channels.router import router as channels_router
    from channelarr.interfaces.api.debug.router import router as debug_router

    app.include_router(channels_router)
    app.include_router(admin_router)
    app.include_router(debug_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str | list[str]]:
        """Liveness probe: 200 as long as the process is running."""
        return {
            "status": "ok",
            "renderer": config.renderer,
            "channels": [c.id for c in CHANNELS],
        }

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
