from .channel_cache import ChannelCachePort
from .channel_resolver import ChannelResolverPort
from .interaction_simulator import InteractionOutcome, InteractionSimulatorPort
from .manifest_extractor import ManifestExtractorPort
from .page_renderer import PageRendererPort

__all__ = [
    "ChannelCachePort",
    "ChannelResolverPort",
    "InteractionOutcome",
    "InteractionSimulatorPort",
    "ManifestExtractorPort",
    "PageRendererPort",
]
