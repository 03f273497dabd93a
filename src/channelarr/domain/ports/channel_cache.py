"""Port for the per-channel last-known-good URL store."""

from __future__ import annotations

from typing import Protocol

from channelarr.domain.entities import CacheEntry, ChannelDescriptor


class ChannelCachePort(Protocol):
    """In-process store of one ``CacheEntry`` per configured channel."""

    def channels(self) -> list[ChannelDescriptor]:
        """Configured channels in table order."""
        ...

    def descriptor(self, channel_id: str) -> ChannelDescriptor:
        """Return the descriptor or raise ``UnknownChannelError``."""
        ...

    def entry(self, channel_id: str) -> CacheEntry:
        """Return the live entry or raise ``UnknownChannelError``."""
        ...

    def snapshot(self) -> dict[str, dict[str, str | None]]:
        """JSON-ready dump of every entry keyed by channel id."""
        ...
