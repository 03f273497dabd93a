from .refresh_channels import RefreshCoordinator
from .resolve_channel import ChannelResolver

__all__ = ["ChannelResolver", "RefreshCoordinator"]
