"""Best-effort interaction sweep that coaxes lazy players into playback.

Selectors differ between player versions and many embeds hide their
controls in nested frames, so every pass deliberately tries everything:

1. a click at the centre of the viewport (full-bleed overlays);
2. the play-button selectors, first match each, on the main document;
3. a sweep clicking *all* matches of every selector plus ``<video>``;
4. steps 2 and 3 again inside every child frame, with a dedicated path
   for known third-party embed hosts.

Every attempt is isolated: a failed click is logged and recorded as an
``InteractionOutcome`` and the pass moves on.  Nothing here raises.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Sequence
from urllib.parse import urlsplit

import structlog

from channelarr.domain.ports.interaction_simulator import InteractionOutcome
from channelarr.infrastructure.config.defaults import DEFAULT_VIEWPORT

log = structlog.get_logger(__name__)

# Ordered by how often they front a live HLS player.
PLAY_SELECTORS: tuple[str, ...] = (
    ".vjs-big-play-button",
    ".jw-display-icon-container",
    ".jw-icon-display",
    ".plyr__control--overlaid",
    ".fp-play",
    ".play-wrapper",
    "button[aria-label='Play']",
    "button[aria-label*='play' i]",
    "[role='button'][aria-label*='play' i]",
    ".vjs-play-control",
    ".jw-icon-playback",
    ".play-button",
    "button.play",
)


@dataclass(frozen=True)
class FrameTarget:
    """Known click target inside a third-party embed frame."""

    container: str
    target: str

    @property
    def selector(self) -> str:
        return f"{self.container} {self.target}"


FRAME_HOST_TARGETS: dict[str, FrameTarget] = {
    "player.vimeo.com": FrameTarget(container=".vp-controls", target="button.play"),
}

class PlaywrightInteractionSimulator:
    """Runs one interaction pass against a Playwright page."""

    def __init__(
        self,
        *,
        selectors: Sequence[str] = PLAY_SELECTORS,
        frame_targets: Mapping[str, FrameTarget] | None = None,
        click_timeout_ms: int = 2_000,
        pause_seconds: float = 0.5,
    ) -> None:
        self._selectors = tuple(selectors)
        self._frame_targets = dict(
            FRAME_HOST_TARGETS if frame_targets is None else frame_targets
        )
        self._click_timeout_ms = click_timeout_ms
        self._pause = pause_seconds

    async def simulate(self, page: Any) -> list[InteractionOutcome]:
        outcomes: list[InteractionOutcome] = [await self._click_center(page)]

        main = page.main_frame
        outcomes += await self._click_targeted(main, "main")
        outcomes += await self._sweep(main, "main")

        for frame in self._child_frames(page):
            scope = frame.url or frame.name or "frame"
            known = self._frame_target(frame)
            if known is not None:
                outcomes += await self._click_frame_target(page, frame, known, scope)
            outcomes += await self._click_targeted(frame, scope)
            outcomes += await self._sweep(frame, scope)

        log.debug(
            "interaction_pass_done",
            attempted=len(outcomes),
            succeeded=sum(1 for o in outcomes if o.ok),
        )
        return outcomes

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _click_center(self, page: Any) -> InteractionOutcome:
        viewport = page.viewport_size or DEFAULT_VIEWPORT
        x = viewport["width"] / 2
        y = viewport["height"] / 2
        return await self._attempt(
            "center_click", f"{x:.0f},{y:.0f}", lambda: page.mouse.click(x, y)
        )

    async def _click_targeted(self, frame: Any, scope: str) -> list[InteractionOutcome]:
        """Click the first match of each selector, pausing after each hit."""
        outcomes: list[InteractionOutcome] = []
        for selector in self._selectors:
            handles = await self._query_all(frame, selector, scope)
            if not handles:
                continue
            handle = handles[0]
            outcomes.append(
                await self._attempt(
                    "targeted_click", f"{scope} {selector}", lambda: self._click(handle)
                )
            )
            await asyncio.sleep(self._pause)
        return outcomes

    async def _sweep(self, frame: Any, scope: str) -> list[InteractionOutcome]:
        """Click every match of every selector, plus every ``<video>``."""
        outcomes: list[InteractionOutcome] = []
        for selector in (*self._selectors, "video"):
            for handle in await self._query_all(frame, selector, scope):
                outcomes.append(
                    await self._attempt(
                        "sweep_click",
                        f"{scope} {selector}",
                        lambda h=handle: self._click(h),
                    )
                )
        return outcomes

    async def _click_frame_target(
        self, page: Any, frame: Any, known: FrameTarget, scope: str
    ) -> list[InteractionOutcome]:
        target = f"{scope} {known.selector}"
        handles = await self._query_all(frame, known.selector, scope)
        if not handles:
            log.debug("frame_target_missing", target=target)
            return [
                InteractionOutcome(
                    "frame_target_click", target, ok=False, detail="not found"
                )
            ]

        handle = handles[0]
        return [
            await self._attempt(
                "frame_target_click", target, lambda: self._click(handle)
            ),
            # Some players ignore synthetic .click(); press the real pointer.
            await self._attempt(
                "pointer_sequence", target, lambda: self._pointer_sequence(page, handle)
            ),
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _child_frames(page: Any) -> list[Any]:
        main = page.main_frame
        return [
            frame
            for frame in page.frames
            if frame is not main and not frame.is_detached()
        ]

    def _frame_target(self, frame: Any) -> FrameTarget | None:
        try:
            host = urlsplit(frame.url).hostname
        except ValueError:
            return None
        return self._frame_targets.get(host or "")

    async def _query_all(self, frame: Any, selector: str, scope: str) -> list[Any]:
        try:
            return await frame.query_selector_all(selector)
        except Exception as exc:  # noqa: BLE001
            log.debug(
                "interaction_query_failed",
                scope=scope,
                selector=selector,
                error=str(exc),
            )
            return []

    async def _click(self, handle: Any) -> None:
        await handle.click(timeout=self._click_timeout_ms, force=True)

    @staticmethod
    async def _pointer_sequence(page: Any, handle: Any) -> None:
        box = await handle.bounding_box()
        if box is None:
            raise RuntimeError("target is not rendered")
        x = box["x"] + box["width"] / 2
        y = box["y"] + box["height"] / 2
        await page.mouse.move(x, y)
        await page.mouse.down()
        await page.mouse.up()

    @staticmethod
    async def _attempt(
        step: str, target: str, action: Callable[[], Awaitable[object]]
    ) -> InteractionOutcome:
        try:
            await action()
        except Exception as exc:  # noqa: BLE001
            log.debug("interaction_failed", step=step, target=target, error=str(exc))
            return InteractionOutcome(step, target, ok=False, detail=str(exc))
        return InteractionOutcome(step, target, ok=True)
