from .channel_cache import InMemoryChannelCache

__all__ = ["InMemoryChannelCache"]
