"""In-process channel cache (lost on restart)."""

from __future__ import annotations

from typing import Iterable

from channelarr.domain.entities import CacheEntry, ChannelDescriptor
from channelarr.domain.exceptions import UnknownChannelError


class InMemoryChannelCache:
    """Implements ChannelCachePort with plain dicts.

    One empty ``CacheEntry`` is created per configured channel up front;
    entries are mutated in place and never removed.
    """

    def __init__(self, channels: Iterable[ChannelDescriptor]) -> None:
        self._descriptors: dict[str, ChannelDescriptor] = {}
        for channel in channels:
            if channel.id in self._descriptors:
                raise ValueError(f"Duplicate channel id: {channel.id!r}")
            self._descriptors[channel.id] = channel
        self._entries = {cid: CacheEntry() for cid in self._descriptors}

    def channels(self) -> list[ChannelDescriptor]:
        return list(self._descriptors.values())

    def descriptor(self, channel_id: str) -> ChannelDescriptor:
        try:
            return self._descriptors[channel_id]
        except KeyError:
            raise UnknownChannelError(channel_id) from None

    def entry(self, channel_id: str) -> CacheEntry:
        try:
            return self._entries[channel_id]
        except KeyError:
            raise UnknownChannelError(channel_id) from None

    def snapshot(self) -> dict[str, dict[str, str | None]]:
        return {cid: entry.to_dict() for cid, entry in self._entries.items()}
