"""Cache/refresh coordinator: last-known-good URL per channel."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import structlog

from channelarr.domain.entities import (
    ChannelDescriptor,
    ChannelLookup,
    ResolutionResult,
)
from channelarr.domain.exceptions import ChannelResolutionError
from channelarr.domain.ports import ChannelCachePort, ChannelResolverPort

log = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshCoordinator:
    """Decides cache hit vs. refresh and records every outcome.

    - A cached URL is served as-is regardless of age; freshness comes
      from the periodic sweep only.
    - A failed refresh sets ``last_error`` and keeps the previous URL.
    - Resolution errors never escape: they are recorded on the entry.
    """

    def __init__(
        self,
        *,
        cache: ChannelCachePort,
        resolver: ChannelResolverPort,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache = cache
        self._resolver = resolver
        self._clock = clock

    async def get_or_refresh(self, channel_id: str) -> ChannelLookup:
        """Serve the cached URL or resolve synchronously on a miss.

        Raises:
            UnknownChannelError: *channel_id* is not configured.
        """
        entry = self._cache.entry(channel_id)
        if entry.url is not None:
            return ChannelLookup(
                id=channel_id,
                url=entry.url,
                cached=True,
                last_updated_at=entry.last_updated_at,
                last_error=entry.last_error,
            )

        await self.refresh_channel(channel_id)
        return ChannelLookup(
            id=channel_id,
            url=entry.url,
            cached=False,
            last_updated_at=entry.last_updated_at,
            last_error=entry.last_error,
        )

    async def refresh_channel(self, channel_id: str) -> ResolutionResult:
        """Resolve *channel_id* unconditionally and record the outcome."""
        channel = self._cache.descriptor(channel_id)
        try:
            result = await self._resolver.resolve(channel)
        except ChannelResolutionError as exc:
            log.warning(
                "channel_refresh_failed",
                channel=channel_id,
                error_kind=type(exc).__name__,
                error=str(exc),
            )
            result = ResolutionResult.failed(channel_id, exc)
        except Exception as exc:
            log.error("channel_refresh_crashed", channel=channel_id, exc_info=True)
            result = ResolutionResult.failed(channel_id, exc)

        self._record(channel, result)
        return result

    async def refresh_all(self) -> dict[str, ResolutionResult]:
        """Refresh every channel, one at a time; failures don't stop the sweep."""
        channels = self._cache.channels()
        log.info("refresh_all_started", channels=len(channels))

        results: dict[str, ResolutionResult] = {}
        for channel in channels:
            results[channel.id] = await self.refresh_channel(channel.id)

        log.info(
            "refresh_all_done",
            ok=sum(1 for r in results.values() if r.ok),
            failed=sum(1 for r in results.values() if not r.ok),
        )
        return results

    def snapshot(self) -> dict[str, dict[str, str | None]]:
        return self._cache.snapshot()

    def _record(self, channel: ChannelDescriptor, result: ResolutionResult) -> None:
        entry = self._cache.entry(channel.id)
        if not result.ok or result.manifest_url is None:
            entry.record_failure(result.error or "resolution failed")
            return

        previous = entry.url
        entry.record_success(result.manifest_url, self._clock())
        if previous != result.manifest_url:
            log.info(
                "channel_url_updated",
                channel=channel.id,
                old=previous,
                new=result.manifest_url,
            )
        else:
            log.info("channel_url_unchanged", channel=channel.id)
