from .channel import (
    CacheEntry,
    CandidateSource,
    ChannelDescriptor,
    ChannelLookup,
    RenderedSurface,
    ResolutionResult,
    isoformat_utc,
)

__all__ = [
    "CacheEntry",
    "CandidateSource",
    "ChannelDescriptor",
    "ChannelLookup",
    "RenderedSurface",
    "ResolutionResult",
    "isoformat_utc",
]
