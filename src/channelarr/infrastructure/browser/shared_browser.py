"""One Chromium process for every channel resolution.

Embedded players often refuse to start without a user gesture, so the
browser is launched with autoplay allowed and audio muted by default.
Each resolution still gets its own context on top of this browser.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog
from playwright.async_api import Browser, Playwright, async_playwright

from channelarr.infrastructure.config.defaults import PLAYER_LAUNCH_ARGS

log = structlog.get_logger(__name__)


class SharedBrowserPool:
    """Lazily launched, crash-tolerant Chromium handle.

    ``acquire()`` launches on first use and relaunches when the process
    has gone away; callers never hold the pool lock while rendering.
    """

    def __init__(
        self,
        *,
        headless: bool = True,
        launch_args: Sequence[str] = PLAYER_LAUNCH_ARGS,
    ) -> None:
        self._headless = headless
        self._launch_args = list(dict.fromkeys(launch_args))
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()
        self._launches = 0

    @property
    def is_running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def acquire(self) -> Browser:
        async with self._lock:
            if not self.is_running:
                await self._launch()
            assert self._browser is not None
            return self._browser

    async def close(self) -> None:
        """Stop Chromium and Playwright (service shutdown)."""
        async with self._lock:
            await self._teardown()
        log.info("shared_browser_closed", launches=self._launches)

    async def _launch(self) -> None:
        if self._playwright is not None:
            # A previous browser existed but is no longer connected.
            log.warning("shared_browser_disconnected", launches=self._launches)
            await self._teardown()

        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._headless,
            args=self._launch_args,
        )
        self._launches += 1
        log.info(
            "shared_browser_launched",
            headless=self._headless,
            args=self._launch_args,
            launch=self._launches,
        )

    async def _teardown(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None

        if browser is not None:
            try:
                await browser.close()
            except Exception:  # noqa: BLE001
                log.debug("shared_browser_close_failed", exc_info=True)
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception:  # noqa: BLE001
                log.debug("shared_playwright_stop_failed", exc_info=True)
