"""Port for obtaining the observable surface of an embed page."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from channelarr.domain.entities import ChannelDescriptor, RenderedSurface


@runtime_checkable
class PageRendererPort(Protocol):
    """Renders an embed page into a ``RenderedSurface``.

    Implementations:
      - PlaywrightPageRenderer (headless Chromium, request observation)
      - HttpxPageRenderer (single GET, raw markup)

    The surface is only valid inside the context manager; every
    per-resolution resource is released on exit.
    """

    @property
    def name(self) -> str:
        """Renderer strategy name ('browser' or 'http')."""
        ...

    def render(
        self, channel: ChannelDescriptor
    ) -> AbstractAsyncContextManager[RenderedSurface]:
        """Open the channel's embed page for one resolution."""
        ...

    async def page_html(self, channel: ChannelDescriptor) -> str:
        """Return the raw (or rendered) HTML of the embed page."""
        ...
