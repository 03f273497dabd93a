"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from channelarr.infrastructure.config import AppConfig

if TYPE_CHECKING:
    import asyncio

    from channelarr.application.use_cases import ChannelResolver, RefreshCoordinator
    from channelarr.domain.ports import ChannelCachePort, PageRendererPort
    from channelarr.infrastructure.browser import SharedBrowserPool
    from channelarr.infrastructure.scheduling import RefreshScheduler


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    channel_cache: ChannelCachePort

    # Shared Chromium (browser renderer only)
    shared_browser_pool: SharedBrowserPool | None

    # Resolution pipeline
    renderer: PageRendererPort
    resolver: ChannelResolver
    coordinator: RefreshCoordinator

    # Periodic refresh
    refresh_scheduler: RefreshScheduler
    _refresh_task: asyncio.Task | None
