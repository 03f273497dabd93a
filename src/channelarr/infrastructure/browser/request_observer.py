"""Network observer that captures the first manifest request of a page."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import structlog

from channelarr.infrastructure.extraction.manifest import is_manifest_url

log = structlog.get_logger(__name__)


class ManifestRequestObserver:
    """Single-slot capture of manifest-bearing requests.

    Attach ``on_request`` to ``page.on("request", ...)`` *before*
    navigating.  Every request whose URL path contains the manifest
    extension is appended (up to ``max_requests``); only the first one
    becomes the ``candidate`` and wakes up ``wait()``.
    """

    def __init__(
        self,
        *,
        channel_id: str = "",
        max_requests: int = 50,
        is_match: Callable[[str], bool] = is_manifest_url,
    ) -> None:
        self._channel_id = channel_id
        self._max_requests = max_requests
        self._is_match = is_match
        self._requests: list[str] = []
        self._seen_total = 0
        self._candidate: str | None = None
        self._found = asyncio.Event()

    @property
    def candidate(self) -> str | None:
        return self._candidate

    @property
    def requests(self) -> list[str]:
        """Manifest requests in observation order (bounded copy)."""
        return list(self._requests)

    @property
    def seen_total(self) -> int:
        """Number of requests of any kind seen since attachment."""
        return self._seen_total

    def on_request(self, request: Any) -> None:
        """Playwright ``request`` event handler."""
        self.observe(request.url)

    def observe(self, url: str) -> bool:
        """Record *url*; return True when it became the candidate."""
        self._seen_total += 1
        if not self._is_match(url):
            return False

        if len(self._requests) < self._max_requests:
            self._requests.append(url)

        if self._candidate is not None:
            log.debug(
                "manifest_request_ignored",
                channel=self._channel_id,
                url=url,
                candidate=self._candidate,
            )
            return False

        self._candidate = url
        self._found.set()
        log.info("manifest_request_captured", channel=self._channel_id, url=url)
        return True

    async def wait(self, timeout: float) -> str | None:
        """Wait up to *timeout* seconds for the first candidate."""
        if self._candidate is not None:
            return self._candidate
        try:
            await asyncio.wait_for(self._found.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            log.debug(
                "manifest_request_wait_timeout",
                channel=self._channel_id,
                timeout_seconds=timeout,
                seen_total=self.seen_total,
            )
            return None
        return self._candidate
