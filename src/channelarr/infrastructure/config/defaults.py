"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

DEFAULT_VIEWPORT: dict[str, int] = {"width": 1280, "height": 720}

# Let players start without a click and keep the headless box silent.
PLAYER_LAUNCH_ARGS: tuple[str, ...] = (
    "--autoplay-policy=no-user-gesture-required",
    "--mute-audio",
)

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "channelarr",
    "environment": "dev",
    "renderer": "browser",
    "http": {
        "timeout_seconds": 20.0,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "playwright": {
        "headless": True,
        "navigation_timeout_ms": 45_000,
        "stealth": False,
        "launch_args": list(PLAYER_LAUNCH_ARGS),
    },
    "resolver": {
        "timeout_seconds": 90.0,
        "manifest_wait_seconds": 30.0,
        "click_timeout_ms": 2_000,
        "click_pause_seconds": 0.5,
        "max_observed_requests": 50,
    },
    "refresh": {
        "interval_seconds": 3600.0,
        "on_startup": True,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
