"""Operator endpoints: forced refresh and cache status."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from channelarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["admin"])


@router.post("/admin/refresh")
async def refresh_all(request: Request) -> JSONResponse:
    """Refresh every channel now and return the resulting cache."""
    state = cast(AppState, request.app.state)

    try:
        await state.coordinator.refresh_all()
    except Exception as exc:
        log.error("admin_refresh_failed", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return JSONResponse(content={"ok": True, "cache": state.coordinator.snapshot()})


@router.get("/status")
async def status(request: Request) -> JSONResponse:
    """Dump every cache entry keyed by channel id."""
    state = cast(AppState, request.app.state)
    return JSONResponse(content=state.coordinator.snapshot())
