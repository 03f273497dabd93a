"""Port for nudging a lazy player into requesting its manifest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class InteractionOutcome:
    """Result of one interaction attempt (click, sweep, pointer sequence)."""

    step: str
    target: str
    ok: bool
    detail: str = ""


@runtime_checkable
class InteractionSimulatorPort(Protocol):
    async def simulate(self, page: Any) -> list[InteractionOutcome]:
        """Run one best-effort interaction pass.  Must never raise."""
        ...
