"""Shared test fixtures for Channelarr test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import pytest

from channelarr.domain.entities import ChannelDescriptor, RenderedSurface
from channelarr.infrastructure.browser.request_observer import ManifestRequestObserver
from channelarr.infrastructure.persistence import InMemoryChannelCache

MANIFEST_URL = "https://cdn.example/live/ch12/index.m3u8?token=abc"

# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def channel() -> ChannelDescriptor:
    return ChannelDescriptor(id="12", source_url="https://embed.example/channel-12")


@pytest.fixture()
def channels(channel: ChannelDescriptor) -> list[ChannelDescriptor]:
    return [
        ChannelDescriptor(id="10", source_url="https://embed.example/channel-10"),
        channel,
    ]


@pytest.fixture()
def cache(channels: list[ChannelDescriptor]) -> InMemoryChannelCache:
    return InMemoryChannelCache(channels)


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fake renderer
# ---------------------------------------------------------------------------


class FakeRenderer:
    """In-memory PageRendererPort.

    ``emit`` lists the URLs the "page" requests right after navigation.
    ``body`` switches it to a fetch-style surface instead.
    """

    name = "fake"

    def __init__(
        self,
        *,
        emit: list[str] | None = None,
        body: str | None = None,
        error: Exception | None = None,
        page: Any = None,
    ) -> None:
        self.emit = list(emit or [])
        self.body = body
        self.error = error
        self.page = page
        self.render_calls = 0
        self.surface: RenderedSurface | None = None
        self.closed = 0

    @asynccontextmanager
    async def render(
        self, channel: ChannelDescriptor
    ) -> AsyncIterator[RenderedSurface]:
        self.render_calls += 1
        if self.error is not None:
            raise self.error
        try:
            if self.body is not None:
                self.surface = RenderedSurface(
                    source_url=channel.source_url, body=self.body
                )
            else:
                observer = ManifestRequestObserver(channel_id=channel.id)
                for url in self.emit:
                    observer.observe(url)
                self.surface = RenderedSurface(
                    source_url=channel.source_url,
                    page=self.page,
                    observer=observer,
                )
            yield self.surface
        finally:
            self.closed += 1

    async def page_html(self, channel: ChannelDescriptor) -> str:
        if self.error is not None:
            raise self.error
        return self.body or "<html></html>"


@pytest.fixture()
def manifest_url() -> str:
    return MANIFEST_URL


@pytest.fixture()
def make_renderer() -> type[FakeRenderer]:
    """Factory for in-memory renderers (see FakeRenderer)."""
    return FakeRenderer
