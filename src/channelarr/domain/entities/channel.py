"""Domain entities for channel resolution.

Pure value objects and the per-channel cache record.  The only I/O-aware
piece is ``RenderedSurface``, which holds an opaque page handle owned by
the renderer that created it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


def isoformat_utc(value: datetime | None) -> str | None:
    """Render a timestamp as ISO-8601 with a ``Z`` suffix."""
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ChannelDescriptor:
    """A supported channel and the embed page its manifest is derived from."""

    id: str
    source_url: str


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of exactly one resolve attempt."""

    channel_id: str
    manifest_url: str | None = None
    observed_request_count: int = 0
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.manifest_url is not None and self.error is None

    @classmethod
    def failed(
        cls,
        channel_id: str,
        exc: BaseException,
        *,
        observed_request_count: int = 0,
    ) -> ResolutionResult:
        return cls(
            channel_id=channel_id,
            observed_request_count=observed_request_count,
            error=str(exc) or type(exc).__name__,
            error_kind=type(exc).__name__,
        )


@dataclass
class CacheEntry:
    """Last-known-good manifest URL for one channel.

    A failed refresh only sets ``last_error``; ``url`` and
    ``last_updated_at`` keep the previous successful values.
    """

    url: str | None = None
    last_updated_at: datetime | None = None
    last_error: str | None = None

    def record_success(self, url: str, at: datetime) -> None:
        self.url = url
        self.last_updated_at = at
        self.last_error = None

    def record_failure(self, error: str) -> None:
        self.last_error = error

    def to_dict(self) -> dict[str, str | None]:
        return {
            "url": self.url,
            "lastUpdated": isoformat_utc(self.last_updated_at),
            "lastError": self.last_error,
        }


@dataclass(frozen=True)
class ChannelLookup:
    """Answer to a cache-or-refresh lookup."""

    id: str
    url: str | None
    cached: bool
    last_updated_at: datetime | None = None
    last_error: str | None = None


class CandidateSource(Protocol):
    """Single-slot source of the first observed manifest request."""

    @property
    def candidate(self) -> str | None: ...

    @property
    def requests(self) -> list[str]: ...

    async def wait(self, timeout: float) -> str | None: ...


@dataclass
class RenderedSurface:
    """What one resolution could observe of an embed page.

    Browser-backed renderers fill ``observer`` (and ``page`` for the
    interaction simulator); fetch-backed renderers fill ``body``.
    """

    source_url: str
    body: str | None = None
    page: Any = None
    observer: CandidateSource | None = None
    navigation_error: str | None = None

    @property
    def interactive(self) -> bool:
        return self.page is not None

    @property
    def candidate(self) -> str | None:
        return self.observer.candidate if self.observer is not None else None

    @property
    def requests(self) -> list[str]:
        return self.observer.requests if self.observer is not None else []
