"""Tests for ChannelResolver."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from channelarr.application.use_cases import ChannelResolver
from channelarr.domain.entities import ChannelDescriptor
from channelarr.domain.exceptions import (
    ExtractionError,
    FetchError,
    ManifestNotFoundError,
)
from channelarr.domain.ports.interaction_simulator import InteractionOutcome
from channelarr.infrastructure.extraction import ManifestExtractor

_JW_HTML = (
    'jwplayer("p").setup('
    '{file: "https://cdn.example/stream/master.m3u8?token=abc"})'
)


def _resolver(renderer, **kwargs) -> ChannelResolver:
    kwargs.setdefault("extractor", ManifestExtractor())
    kwargs.setdefault("manifest_wait_seconds", 0.05)
    kwargs.setdefault("timeout_seconds", 1.0)
    return ChannelResolver(renderer=renderer, **kwargs)


def _simulator(on_simulate=None) -> MagicMock:
    simulator = MagicMock()

    async def _simulate(page):
        if on_simulate is not None:
            on_simulate()
        return [InteractionOutcome("center_click", "640,360", ok=True)]

    simulator.simulate = AsyncMock(side_effect=_simulate)
    return simulator


class TestObservedResolution:
    async def test_first_observed_manifest_wins(
        self, make_renderer, channel: ChannelDescriptor
    ) -> None:
        renderer = make_renderer(
            emit=[
                "https://cdn.example/a/index.m3u8",
                "https://cdn.example/b/index.m3u8",
                "https://cdn.example/c/index.m3u8",
            ],
            page=MagicMock(),
        )

        result = await _resolver(renderer).resolve(channel)

        assert result.ok is True
        assert result.manifest_url == "https://cdn.example/a/index.m3u8"
        assert result.observed_request_count == 3
        assert renderer.closed == 1

    async def test_simulation_skipped_when_already_captured(
        self, make_renderer, channel: ChannelDescriptor, manifest_url: str
    ) -> None:
        simulator = _simulator()
        renderer = make_renderer(emit=[manifest_url], page=MagicMock())

        await _resolver(renderer, simulator=simulator).resolve(channel)

        simulator.simulate.assert_not_awaited()

    async def test_simulation_triggers_manifest(
        self, make_renderer, channel: ChannelDescriptor, manifest_url: str
    ) -> None:
        renderer = make_renderer(emit=[], page=MagicMock())
        simulator = _simulator(
            on_simulate=lambda: renderer.surface.observer.observe(manifest_url)
        )

        result = await _resolver(renderer, simulator=simulator).resolve(channel)

        assert result.manifest_url == manifest_url
        assert simulator.simulate.await_count == 1

    async def test_two_passes_when_nothing_found(
        self, make_renderer, channel: ChannelDescriptor
    ) -> None:
        simulator = _simulator()
        renderer = make_renderer(emit=[], page=MagicMock())

        with pytest.raises(ManifestNotFoundError):
            await _resolver(renderer, simulator=simulator).resolve(channel)

        assert simulator.simulate.await_count == 2
        assert renderer.closed == 1

    async def test_no_simulation_without_page(
        self, make_renderer, channel: ChannelDescriptor, manifest_url: str
    ) -> None:
        simulator = _simulator()
        renderer = make_renderer(emit=[manifest_url])

        await _resolver(renderer, simulator=simulator).resolve(channel)

        simulator.simulate.assert_not_awaited()


class TestMarkupResolution:
    async def test_markup_manifest(
        self, make_renderer, channel: ChannelDescriptor
    ) -> None:
        result = await _resolver(make_renderer(body=_JW_HTML)).resolve(channel)

        assert result.manifest_url == "https://cdn.example/stream/master.m3u8?token=abc"
        assert result.observed_request_count == 0

    async def test_markup_without_token(
        self, make_renderer, channel: ChannelDescriptor
    ) -> None:
        with pytest.raises(ExtractionError):
            await _resolver(make_renderer(body="<html></html>")).resolve(channel)

    async def test_renderer_errors_propagate(
        self, make_renderer, channel: ChannelDescriptor
    ) -> None:
        renderer = make_renderer(error=FetchError("12", "connection refused"))
        with pytest.raises(FetchError):
            await _resolver(renderer).resolve(channel)


class TestTimeout:
    async def test_hard_timeout_is_manifest_not_found(
        self, make_renderer, channel: ChannelDescriptor
    ) -> None:
        async def _hang(page):
            await asyncio.sleep(10)

        simulator = MagicMock()
        simulator.simulate = AsyncMock(side_effect=_hang)
        renderer = make_renderer(emit=[], page=MagicMock())

        resolver = _resolver(
            renderer,
            simulator=simulator,
            timeout_seconds=0.05,
            manifest_wait_seconds=0.01,
        )
        with pytest.raises(ManifestNotFoundError, match="within"):
            await resolver.resolve(channel)

        assert renderer.closed == 1
