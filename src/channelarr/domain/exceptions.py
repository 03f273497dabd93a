"""Channel resolution exceptions."""

from __future__ import annotations


class ChannelError(Exception):
    """Base class for all channel-related errors."""


class UnknownChannelError(ChannelError):
    """Raised when a channel id is not in the configured channel table."""

    def __init__(self, channel_id: str) -> None:
        super().__init__(f"Unknown channel {channel_id}")
        self.channel_id = channel_id


class ChannelResolutionError(ChannelError):
    """Base class for failures of a single resolve attempt."""

    def __init__(self, channel_id: str, message: str) -> None:
        super().__init__(message)
        self.channel_id = channel_id


class NavigationError(ChannelResolutionError):
    """The embed page did not finish loading in time (non-fatal)."""


class HttpStatusError(ChannelResolutionError):
    """The embed page answered with a non-success status."""

    def __init__(self, channel_id: str, status_code: int) -> None:
        super().__init__(
            channel_id, f"HTTP {status_code} while fetching channel {channel_id}"
        )
        self.status_code = status_code


class FetchError(ChannelResolutionError):
    """The embed page could not be fetched at all (DNS, TCP, TLS, timeout)."""


class ExtractionError(ChannelResolutionError):
    """No manifest reference was found in the page markup."""


class ManifestNotFoundError(ChannelResolutionError):
    """No manifest request was observed within the time budget."""
