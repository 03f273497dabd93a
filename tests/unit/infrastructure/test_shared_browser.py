"""Tests for SharedBrowserPool."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

from channelarr.infrastructure.browser import SharedBrowserPool
from channelarr.infrastructure.config.defaults import PLAYER_LAUNCH_ARGS

_PATCH = "channelarr.infrastructure.browser.shared_browser.async_playwright"


def _mock_playwright(connected: bool = True) -> tuple[AsyncMock, MagicMock]:
    """Return (playwright, browser) mocks wired together."""
    browser = MagicMock()
    browser.is_connected = MagicMock(return_value=connected)
    browser.close = AsyncMock()

    playwright = AsyncMock()
    playwright.chromium = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()
    return playwright, browser


class TestAcquire:
    @patch(_PATCH)
    async def test_lazy_launch_once(self, mock_ap: MagicMock) -> None:
        pw, browser = _mock_playwright()
        mock_ap.return_value.start = AsyncMock(return_value=pw)

        pool = SharedBrowserPool(headless=True)
        assert pool.is_running is False

        first = await pool.acquire()
        second = await pool.acquire()

        assert first is browser
        assert second is browser
        pw.chromium.launch.assert_awaited_once()

    @patch(_PATCH)
    async def test_launches_with_player_switches(self, mock_ap: MagicMock) -> None:
        pw, _ = _mock_playwright()
        mock_ap.return_value.start = AsyncMock(return_value=pw)

        await SharedBrowserPool(headless=False).acquire()

        pw.chromium.launch.assert_awaited_once_with(
            headless=False,
            args=[
                "--autoplay-policy=no-user-gesture-required",
                "--mute-audio",
            ],
        )

    @patch(_PATCH)
    async def test_custom_switches_deduplicated(self, mock_ap: MagicMock) -> None:
        pw, _ = _mock_playwright()
        mock_ap.return_value.start = AsyncMock(return_value=pw)

        pool = SharedBrowserPool(
            launch_args=[*PLAYER_LAUNCH_ARGS, "--mute-audio", "--lang=he-IL"]
        )
        await pool.acquire()

        args = pw.chromium.launch.await_args.kwargs["args"]
        assert args.count("--mute-audio") == 1
        assert args[-1] == "--lang=he-IL"

    @patch(_PATCH)
    async def test_concurrent_callers_share_one_launch(
        self, mock_ap: MagicMock
    ) -> None:
        pw, browser = _mock_playwright()
        mock_ap.return_value.start = AsyncMock(return_value=pw)

        pool = SharedBrowserPool()
        results = await asyncio.gather(*(pool.acquire() for _ in range(5)))

        assert all(b is browser for b in results)
        pw.chromium.launch.assert_awaited_once()

    @patch(_PATCH)
    async def test_relaunch_after_disconnect(self, mock_ap: MagicMock) -> None:
        pw, browser = _mock_playwright()
        mock_ap.return_value.start = AsyncMock(return_value=pw)

        pool = SharedBrowserPool()
        await pool.acquire()
        browser.is_connected.return_value = False

        await pool.acquire()

        assert pw.chromium.launch.await_count == 2
        pw.stop.assert_awaited_once()


class TestClose:
    @patch(_PATCH)
    async def test_closes_browser_and_playwright(self, mock_ap: MagicMock) -> None:
        pw, browser = _mock_playwright()
        mock_ap.return_value.start = AsyncMock(return_value=pw)

        pool = SharedBrowserPool()
        await pool.acquire()
        await pool.close()

        browser.close.assert_awaited_once()
        pw.stop.assert_awaited_once()
        assert pool.is_running is False

    @patch(_PATCH)
    async def test_close_without_launch_is_noop(self, mock_ap: MagicMock) -> None:
        pool = SharedBrowserPool()
        await pool.close()
        mock_ap.assert_not_called()

    @patch(_PATCH)
    async def test_close_error_does_not_raise(self, mock_ap: MagicMock) -> None:
        pw, browser = _mock_playwright()
        browser.close = AsyncMock(side_effect=RuntimeError("gone"))
        mock_ap.return_value.start = AsyncMock(return_value=pw)

        pool = SharedBrowserPool()
        await pool.acquire()
        await pool.close()

        pw.stop.assert_awaited_once()
