"""Channel resolver: one bounded "resolve this channel now" operation.

Per invocation the resolver walks
``Rendering -> Simulating (interactive renderers only) -> Waiting``
and ends either with a manifest URL or a ``ChannelResolutionError``.
The whole walk runs under one hard timeout; expiry means TimedOut and
surfaces as ``ManifestNotFoundError``.  Invocations share nothing but
the renderer's long-lived resources, so two calls for the same channel
are two full, independent resolutions.
"""

from __future__ import annotations

import asyncio
import time

import structlog

from channelarr.domain.entities import (
    ChannelDescriptor,
    RenderedSurface,
    ResolutionResult,
)
from channelarr.domain.exceptions import ManifestNotFoundError
from channelarr.domain.ports import (
    InteractionSimulatorPort,
    ManifestExtractorPort,
    PageRendererPort,
)

log = structlog.get_logger(__name__)


class ChannelResolver:
    """Orchestrates renderer, interaction simulator and extractor."""

    def __init__(
        self,
        *,
        renderer: PageRendererPort,
        extractor: ManifestExtractorPort,
        simulator: InteractionSimulatorPort | None = None,
        timeout_seconds: float = 90.0,
        manifest_wait_seconds: float = 30.0,
        simulation_passes: int = 2,
    ) -> None:
        self._renderer = renderer
        self._extractor = extractor
        self._simulator = simulator
        self._timeout = timeout_seconds
        self._manifest_wait = manifest_wait_seconds
        self._passes = simulation_passes

    async def resolve(self, channel: ChannelDescriptor) -> ResolutionResult:
        """Resolve a fresh manifest URL for *channel*.

        Raises:
            ManifestNotFoundError: nothing observed within the budget.
            ChannelResolutionError: any other renderer/extractor failure.
        """
        start = time.perf_counter()
        log.info(
            "channel_resolve_started",
            channel=channel.id,
            renderer=self._renderer.name,
        )
        try:
            result = await asyncio.wait_for(self._run(channel), timeout=self._timeout)
        except asyncio.TimeoutError:
            log.warning(
                "channel_resolve_timed_out",
                channel=channel.id,
                timeout_seconds=self._timeout,
            )
            raise ManifestNotFoundError(
                channel.id,
                f"No manifest for channel {channel.id} "
                f"within {self._timeout:g}s",
            ) from None

        log.info(
            "channel_resolved",
            channel=channel.id,
            url=result.manifest_url,
            observed_requests=result.observed_request_count,
            duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
        )
        return result

    async def _run(self, channel: ChannelDescriptor) -> ResolutionResult:
        async with self._renderer.render(channel) as surface:
            await self._simulate(surface, channel)
            await self._wait_for_candidate(surface, channel)
            url = self._extractor.extract(surface, channel.id)
            return ResolutionResult(
                channel_id=channel.id,
                manifest_url=url,
                observed_request_count=len(surface.requests),
            )

    async def _simulate(
        self, surface: RenderedSurface, channel: ChannelDescriptor
    ) -> None:
        # The second pass reaches frames that only appear after the first.
        if self._simulator is None or not surface.interactive:
            return
        for pass_no in range(1, self._passes + 1):
            if surface.candidate is not None:
                log.debug(
                    "simulation_skipped",
                    channel=channel.id,
                    pass_no=pass_no,
                )
                return
            outcomes = await self._simulator.simulate(surface.page)
            log.debug(
                "simulation_pass_done",
                channel=channel.id,
                pass_no=pass_no,
                attempted=len(outcomes),
                succeeded=sum(1 for o in outcomes if o.ok),
            )

    async def _wait_for_candidate(
        self, surface: RenderedSurface, channel: ChannelDescriptor
    ) -> None:
        if surface.observer is None or surface.candidate is not None:
            return
        url = await surface.observer.wait(self._manifest_wait)
        if url is None:
            log.info(
                "manifest_wait_expired",
                channel=channel.id,
                wait_seconds=self._manifest_wait,
                navigation_error=surface.navigation_error,
            )
