"""Port for one bounded resolve-this-channel-now operation."""

from __future__ import annotations

from typing import Protocol

from channelarr.domain.entities import ChannelDescriptor, ResolutionResult


class ChannelResolverPort(Protocol):
    async def resolve(self, channel: ChannelDescriptor) -> ResolutionResult:
        """Resolve a fresh manifest URL.

        Raises ``ChannelResolutionError`` subclasses on failure.
        """
        ...
