"""Tests for HttpxPageRenderer."""

from __future__ import annotations

import httpx
import pytest
import respx

from channelarr.domain.entities import ChannelDescriptor
from channelarr.domain.exceptions import FetchError, HttpStatusError
from channelarr.infrastructure.renderers import HttpxPageRenderer

_URL = "https://embed.example/channel-12"
_CHANNEL = ChannelDescriptor(id="12", source_url=_URL)
_PAGE = '<script>jwplayer("p").setup({file: "https://cdn.example/m.m3u8?t=1"})</script>'


class TestPageHtml:
    @respx.mock
    async def test_returns_body(self) -> None:
        respx.get(_URL).respond(200, text=_PAGE)

        async with httpx.AsyncClient() as client:
            html = await HttpxPageRenderer(client).page_html(_CHANNEL)
        assert html == _PAGE

    @respx.mock
    async def test_sends_browser_headers(self) -> None:
        route = respx.get(_URL).respond(200, text=_PAGE)

        async with httpx.AsyncClient() as client:
            renderer = HttpxPageRenderer(client, user_agent="TestAgent/1.0")
            await renderer.page_html(_CHANNEL)

        sent = route.calls.last.request.headers
        assert sent["User-Agent"] == "TestAgent/1.0"
        assert sent["Accept-Language"].startswith("en-US")
        assert "text/html" in sent["Accept"]

    @respx.mock
    async def test_follows_redirects(self) -> None:
        respx.get(_URL).respond(302, headers={"Location": "https://embed.example/b"})
        respx.get("https://embed.example/b").respond(200, text="moved")

        async with httpx.AsyncClient() as client:
            html = await HttpxPageRenderer(client).page_html(_CHANNEL)
        assert html == "moved"

    @respx.mock
    async def test_non_success_status_raises(self) -> None:
        respx.get(_URL).respond(403)

        async with httpx.AsyncClient() as client:
            with pytest.raises(HttpStatusError) as exc_info:
                await HttpxPageRenderer(client).page_html(_CHANNEL)
        assert exc_info.value.status_code == 403
        assert exc_info.value.channel_id == "12"

    @respx.mock
    async def test_transport_error_raises_fetch_error(self) -> None:
        respx.get(_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(FetchError, match="ConnectError"):
                await HttpxPageRenderer(client).page_html(_CHANNEL)


class TestRender:
    @respx.mock
    async def test_surface_carries_body_only(self) -> None:
        respx.get(_URL).respond(200, text=_PAGE)

        async with httpx.AsyncClient() as client:
            renderer = HttpxPageRenderer(client)
            async with renderer.render(_CHANNEL) as surface:
                assert surface.body == _PAGE
                assert surface.interactive is False
                assert surface.observer is None
        assert renderer.name == "http"
