"""Background refresh loop: sweep all channels now, then every interval."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from channelarr.application.use_cases.refresh_channels import RefreshCoordinator

log = structlog.get_logger(__name__)


class RefreshScheduler:
    """Runs ``refresh_all()`` periodically for the life of the process.

    Call :meth:`run_forever` as an asyncio task during app lifespan.
    Cancellation is clean: the task exits from its current sleep or sweep.
    """

    def __init__(
        self,
        *,
        coordinator: RefreshCoordinator,
        interval_seconds: float = 3600.0,
        run_on_startup: bool = True,
    ) -> None:
        self._coordinator = coordinator
        self._interval = interval_seconds
        self._run_on_startup = run_on_startup
        self._sweeps = 0

    async def run_forever(self) -> None:
        log.info(
            "refresh_scheduler_started",
            interval_seconds=self._interval,
            run_on_startup=self._run_on_startup,
        )
        try:
            if not self._run_on_startup:
                await asyncio.sleep(self._interval)
            while True:
                await self._tick()
                await asyncio.sleep(self._interval)
        except asyncio.CancelledError:
            log.info("refresh_scheduler_cancelled", sweeps=self._sweeps)
            raise

    async def _tick(self) -> None:
        try:
            await self._coordinator.refresh_all()
        except Exception:
            log.error("refresh_scheduler_tick_error", exc_info=True)
        finally:
            self._sweeps += 1
