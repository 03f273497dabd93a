"""Channelarr - resolves live channel ids to fresh HLS manifest URLs."""

__version__ = "0.1.0"
