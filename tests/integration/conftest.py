"""Shared fixtures for integration tests.

These tests wire real components together (config loader, app factory,
lifespan, coordinator, resolver) with network mocked via respx.
"""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_channelarr_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host CHANNELARR_* variables from leaking into config tests."""
    for key in list(os.environ):
        if key.startswith("CHANNELARR_"):
            monkeypatch.delenv(key, raising=False)
