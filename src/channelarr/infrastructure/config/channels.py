"""Compiled-in channel table (not externally configurable)."""

from __future__ import annotations

from channelarr.domain.entities import ChannelDescriptor

CHANNELS: tuple[ChannelDescriptor, ...] = (
    ChannelDescriptor(
        id="10",
        source_url="https://www.livehdtv.com/embed/arutz10",
    ),
    ChannelDescriptor(
        id="12",
        source_url="https://www.livehdtv.com/embed/channel-12-live-stream-from-israel",
    ),
)
