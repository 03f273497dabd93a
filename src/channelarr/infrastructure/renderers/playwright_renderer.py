"""Browser-backed page renderer.

Opens the embed page in a fresh context of the shared Chromium, with a
manifest request observer attached before navigation starts.  Requests
fired during early script execution are therefore never missed.

Navigation failures are not fatal: many players finish enough setup
before the ``load`` event to still request their manifest later, so the
error is logged, stored on the surface, and rendering continues.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from playwright.async_api import BrowserContext, Page
from playwright.async_api import Error as PlaywrightError
from playwright_stealth import Stealth

from channelarr.domain.entities import ChannelDescriptor, RenderedSurface
from channelarr.domain.exceptions import NavigationError
from channelarr.infrastructure.browser.request_observer import ManifestRequestObserver
from channelarr.infrastructure.browser.shared_browser import SharedBrowserPool
from channelarr.infrastructure.config.defaults import (
    DEFAULT_USER_AGENT,
    DEFAULT_VIEWPORT,
)

log = structlog.get_logger(__name__)

class PlaywrightPageRenderer:
    """Renders embed pages in headless Chromium and watches the network."""

    def __init__(
        self,
        pool: SharedBrowserPool,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        viewport: dict[str, int] | None = None,
        navigation_timeout_ms: int = 45_000,
        max_observed_requests: int = 50,
        stealth: bool = False,
    ) -> None:
        self._pool = pool
        self._user_agent = user_agent
        self._viewport = dict(viewport or DEFAULT_VIEWPORT)
        self._navigation_timeout_ms = navigation_timeout_ms
        self._max_observed_requests = max_observed_requests
        self._stealth = stealth

    @property
    def name(self) -> str:
        return "browser"

    @asynccontextmanager
    async def render(
        self, channel: ChannelDescriptor
    ) -> AsyncIterator[RenderedSurface]:
        browser = await self._pool.acquire()
        context = await browser.new_context(
            user_agent=self._user_agent,
            viewport=self._viewport,
        )
        page: Page | None = None
        try:
            if self._stealth:
                await Stealth().apply_stealth_async(context)
            page = await context.new_page()

            # Must be attached before goto().
            observer = ManifestRequestObserver(
                channel_id=channel.id,
                max_requests=self._max_observed_requests,
            )
            page.on("request", observer.on_request)

            surface = RenderedSurface(
                source_url=channel.source_url,
                page=page,
                observer=observer,
            )
            error = await self._navigate(page, channel)
            if error is not None:
                surface.navigation_error = str(error)

            yield surface
        finally:
            await self._close(page, context, channel)

    async def page_html(self, channel: ChannelDescriptor) -> str:
        """Return the DOM serialisation after the initial load."""
        async with self.render(channel) as surface:
            return await surface.page.content()

    async def _navigate(
        self, page: Page, channel: ChannelDescriptor
    ) -> NavigationError | None:
        try:
            resp = await page.goto(
                channel.source_url,
                wait_until="load",
                timeout=self._navigation_timeout_ms,
            )
        except PlaywrightError as exc:
            error = NavigationError(
                channel.id,
                f"Navigation to {channel.source_url} did not complete: {exc.message}",
            )
            log.warning(
                "navigation_failed",
                channel=channel.id,
                url=channel.source_url,
                timeout_ms=self._navigation_timeout_ms,
                error=exc.message,
            )
            return error

        if resp is not None and resp.status >= 400:
            log.warning(
                "navigation_http_error",
                channel=channel.id,
                url=channel.source_url,
                status=resp.status,
            )
        return None

    async def _close(
        self,
        page: Page | None,
        context: BrowserContext,
        channel: ChannelDescriptor,
    ) -> None:
        try:
            if page is not None and not page.is_closed():
                await page.close()
        except PlaywrightError:
            log.warning("page_close_error", channel=channel.id, exc_info=True)
        try:
            await context.close()
        except PlaywrightError:
            log.warning("context_close_error", channel=channel.id, exc_info=True)
