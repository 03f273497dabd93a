from .httpx_renderer import HttpxPageRenderer
from .playwright_renderer import PlaywrightPageRenderer

__all__ = ["HttpxPageRenderer", "PlaywrightPageRenderer"]
