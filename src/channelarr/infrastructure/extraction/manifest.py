"""Manifest URL detection and extraction.

Two surfaces are supported:

- observed requests (browser renderer): the first manifest request
  captured by the observer *is* the result;
- raw markup (http renderer): the player setup is scanned for
  ``file: "https://...m3u8?..."`` (JWPlayer style).

Only the first markup match is used.  Pages embedding several players
will report the first one.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from channelarr.domain.entities import RenderedSurface
from channelarr.domain.exceptions import ExtractionError, ManifestNotFoundError

MANIFEST_EXTENSION = ".m3u8"

_PLAYER_FILE_RE = re.compile(
    r'file\s*:\s*"(https?://[^"]+\.m3u8[^"]*)"',
    re.IGNORECASE,
)


def is_manifest_url(url: str) -> bool:
    """True when the URL *path* carries the manifest extension."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return False
    return MANIFEST_EXTENSION in path.lower()


def extract_manifest_from_html(html: str, channel_id: str) -> str:
    """Return the first player-config manifest URL in *html*.

    Raises:
        ExtractionError: no ``file: "...m3u8"`` entry in the markup.
    """
    match = _PLAYER_FILE_RE.search(html)
    if not match:
        raise ExtractionError(
            channel_id,
            f"Could not find m3u8 token in JWPlayer config for channel {channel_id}",
        )
    return match.group(1)


class ManifestExtractor:
    """Picks the manifest URL off a ``RenderedSurface``."""

    def extract(self, surface: RenderedSurface, channel_id: str) -> str:
        if surface.observer is not None:
            if surface.candidate is None:
                raise ManifestNotFoundError(
                    channel_id,
                    f"No m3u8 request observed for channel {channel_id}",
                )
            return surface.candidate
        return extract_manifest_from_html(surface.body or "", channel_id)
