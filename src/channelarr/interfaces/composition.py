"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from channelarr.application.use_cases import ChannelResolver, RefreshCoordinator
from channelarr.domain.ports import InteractionSimulatorPort, PageRendererPort
from channelarr.infrastructure.browser import SharedBrowserPool
from channelarr.infrastructure.config import CHANNELS, AppConfig
from channelarr.infrastructure.extraction import ManifestExtractor
from channelarr.infrastructure.interaction import PlaywrightInteractionSimulator
from channelarr.infrastructure.persistence import InMemoryChannelCache
from channelarr.infrastructure.renderers import (
    HttpxPageRenderer,
    PlaywrightPageRenderer,
)
from channelarr.infrastructure.scheduling import RefreshScheduler
from channelarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def _build_renderer(
    state: AppState, config: AppConfig
) -> tuple[PageRendererPort, InteractionSimulatorPort | None]:
    """Select the renderer strategy (and simulator) from config."""
    if config.renderer == "http":
        state.shared_browser_pool = None
        renderer = HttpxPageRenderer(
            state.http_client,
            user_agent=config.http_user_agent,
            timeout_seconds=config.http_timeout_seconds,
        )
        return renderer, None

    state.shared_browser_pool = SharedBrowserPool(
        headless=config.playwright_headless,
        launch_args=config.playwright_launch_args,
    )
    renderer = PlaywrightPageRenderer(
        state.shared_browser_pool,
        user_agent=config.http_user_agent,
        navigation_timeout_ms=config.playwright_navigation_timeout_ms,
        max_observed_requests=config.max_observed_requests,
        stealth=config.playwright_stealth,
    )
    simulator = PlaywrightInteractionSimulator(
        click_timeout_ms=config.click_timeout_ms,
        pause_seconds=config.click_pause_seconds,
    )
    return renderer, simulator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Channel cache (one empty entry per configured channel)
        2. HTTP client (used by the http renderer)
        3. Renderer (+ shared browser and simulator in browser mode)
        4. Resolver and refresh coordinator
        5. Refresh scheduler task (sweep now, then every interval)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Channel cache
    state.channel_cache = InMemoryChannelCache(CHANNELS)
    log.info("channel_cache_initialized", channels=[c.id for c in CHANNELS])

    # 2) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=True,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 3) Renderer
    state.renderer, simulator = _build_renderer(state, config)
    log.info("renderer_initialized", renderer=state.renderer.name)

    # 4) Resolver + coordinator
    state.resolver = ChannelResolver(
        renderer=state.renderer,
        extractor=ManifestExtractor(),
        simulator=simulator,
        timeout_seconds=config.resolve_timeout_seconds,
        manifest_wait_seconds=config.manifest_wait_seconds,
    )
    state.coordinator = RefreshCoordinator(
        cache=state.channel_cache,
        resolver=state.resolver,
    )

    # 5) Refresh scheduler
    state.refresh_scheduler = RefreshScheduler(
        coordinator=state.coordinator,
        interval_seconds=config.refresh_interval_seconds,
        run_on_startup=config.refresh_on_startup,
    )
    state._refresh_task = asyncio.create_task(state.refresh_scheduler.run_forever())

    log.info("app_startup_complete")

    try:
        yield
    finally:
        if state._refresh_task is not None:
            state._refresh_task.cancel()
            with suppress(asyncio.CancelledError):
                await state._refresh_task
            log.info("refresh_scheduler_stopped")

        if state.shared_browser_pool is not None:
            await state.shared_browser_pool.close()

        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
