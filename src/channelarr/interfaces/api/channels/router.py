"""Channel lookup endpoint: id -> current manifest URL."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from channelarr.domain.entities import isoformat_utc
from channelarr.domain.exceptions import UnknownChannelError
from channelarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["channels"])


@router.get("/channel/{channel_id}")
async def get_channel(request: Request, channel_id: str) -> JSONResponse:
    """Return the cached manifest URL, resolving on a cold cache.

    404 for unknown ids (no resolution is attempted), 500 when
    resolution fails and nothing was cached before.
    """
    state = cast(AppState, request.app.state)

    try:
        lookup = await state.coordinator.get_or_refresh(channel_id)
    except UnknownChannelError as exc:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    if lookup.url is None:
        log.warning(
            "channel_url_unavailable",
            channel=channel_id,
            error=lookup.last_error,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": lookup.last_error
                or f"No URL available for channel {channel_id}",
            },
        )

    return JSONResponse(
        content={
            "id": lookup.id,
            "url": lookup.url,
            "lastUpdated": isoformat_utc(lookup.last_updated_at),
            "cached": lookup.cached,
            "lastError": lookup.last_error,
        }
    )
