"""Debug endpoint: raw embed page HTML for a channel."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from channelarr.domain.exceptions import UnknownChannelError
from channelarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/debug", tags=["debug"])


@router.get("/html-{channel_id}", response_class=PlainTextResponse)
async def channel_html(request: Request, channel_id: str) -> PlainTextResponse:
    """Fetch (or render) the embed page with the active renderer."""
    state = cast(AppState, request.app.state)

    try:
        channel = state.channel_cache.descriptor(channel_id)
    except UnknownChannelError as exc:
        return PlainTextResponse(str(exc), status_code=404)

    try:
        html = await state.renderer.page_html(channel)
    except Exception as exc:
        log.warning("debug_html_failed", channel=channel_id, error=str(exc))
        return PlainTextResponse(f"Error fetching HTML: {exc}", status_code=500)

    return PlainTextResponse(html)
