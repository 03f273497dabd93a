"""Fetch-backed page renderer: one GET, the raw body is the surface."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from channelarr.domain.entities import ChannelDescriptor, RenderedSurface
from channelarr.domain.exceptions import FetchError, HttpStatusError
from channelarr.infrastructure.config.defaults import DEFAULT_USER_AGENT

log = structlog.get_logger(__name__)

_BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}


class HttpxPageRenderer:
    """Renders an embed page by fetching its markup with httpx.

    No scripts run, so only manifests referenced literally in the player
    setup can be found on the resulting surface.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = 20.0,
    ) -> None:
        self._http = http_client
        self._headers = {"User-Agent": user_agent, **_BROWSER_HEADERS}
        self._timeout = timeout_seconds

    @property
    def name(self) -> str:
        return "http"

    async def page_html(self, channel: ChannelDescriptor) -> str:
        """GET the embed page and return its body.

        Raises:
            FetchError: transport failure (DNS, connect, TLS, timeout).
            HttpStatusError: response status outside 2xx.
        """
        log.info("embed_html_fetching", channel=channel.id, url=channel.source_url)
        try:
            resp = await self._http.get(
                channel.source_url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            raise FetchError(
                channel.id,
                f"Request for channel {channel.id} failed: "
                f"{type(exc).__name__}: {exc}",
            ) from exc

        if not resp.is_success:
            log.warning(
                "embed_html_http_error",
                channel=channel.id,
                status=resp.status_code,
            )
            raise HttpStatusError(channel.id, resp.status_code)

        return resp.text

    @asynccontextmanager
    async def render(
        self, channel: ChannelDescriptor
    ) -> AsyncIterator[RenderedSurface]:
        body = await self.page_html(channel)
        yield RenderedSurface(source_url=channel.source_url, body=body)
