from .simulator import PLAY_SELECTORS, FrameTarget, PlaywrightInteractionSimulator

__all__ = ["PLAY_SELECTORS", "FrameTarget", "PlaywrightInteractionSimulator"]
