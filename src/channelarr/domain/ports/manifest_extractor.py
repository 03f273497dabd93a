"""Port for picking the manifest URL off a rendered surface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from channelarr.domain.entities import RenderedSurface


@runtime_checkable
class ManifestExtractorPort(Protocol):
    def extract(self, surface: RenderedSurface, channel_id: str) -> str:
        """Return the manifest URL or raise a ``ChannelResolutionError``."""
        ...
