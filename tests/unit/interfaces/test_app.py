"""Tests for the app factory and CLI argument wiring."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from channelarr.infrastructure.config import AppConfig
from channelarr.interfaces.app import create_app
from channelarr.interfaces.app_state import AppState
from channelarr.interfaces.cli.cli import _cli_overrides, _parse_args, start


def _config(**overrides) -> AppConfig:
    overrides.setdefault("renderer", "http")
    overrides.setdefault("refresh_on_startup", False)
    return AppConfig.model_validate(overrides)


class TestCreateApp:
    def test_state_holds_config(self) -> None:
        config = _config()
        app = create_app(config)
        assert isinstance(app.state, AppState)
        assert app.state.config is config

    def test_routes_registered(self) -> None:
        paths = set(create_app(_config()).openapi()["paths"])
        assert {
            "/api/channel/{channel_id}",
            "/admin/refresh",
            "/status",
            "/debug/html-{channel_id}",
            "/healthz",
        } <= paths

    def test_healthz(self) -> None:
        with TestClient(create_app(_config())) as client:
            resp = client.get("/healthz")

        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ok",
            "renderer": "http",
            "channels": ["10", "12"],
        }

    def test_lifespan_wires_http_renderer(self) -> None:
        app = create_app(_config())
        with TestClient(app):
            assert app.state.renderer.name == "http"
            assert app.state.shared_browser_pool is None
            assert app.state.coordinator.snapshot().keys() == {"10", "12"}

    def test_lifespan_wires_browser_renderer_lazily(self) -> None:
        app = create_app(_config(renderer="browser"))
        with TestClient(app):
            assert app.state.renderer.name == "browser"
            assert app.state.shared_browser_pool is not None
            assert app.state.shared_browser_pool.is_running is False


class TestCli:
    def test_overrides_only_for_given_flags(self) -> None:
        args = _parse_args(["--renderer", "http", "--log-level", "DEBUG"])
        assert _cli_overrides(args) == {"renderer": "http", "log_level": "DEBUG"}

    def test_no_flags_no_overrides(self) -> None:
        assert _cli_overrides(_parse_args([])) == {}

    @patch("channelarr.interfaces.cli.cli.uvicorn")
    @patch("channelarr.interfaces.cli.cli.configure_logging")
    def test_start_defaults_to_port_10000(
        self,
        mock_logging: MagicMock,
        mock_uvicorn: MagicMock,
        monkeypatch,
    ) -> None:
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("HOST", raising=False)
        mock_logging.return_value = {"version": 1}

        start(["--renderer", "http"])

        kwargs = mock_uvicorn.run.call_args.kwargs
        assert kwargs["port"] == 10000
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["log_config"] == {"version": 1}

    @patch("channelarr.interfaces.cli.cli.uvicorn")
    @patch("channelarr.interfaces.cli.cli.configure_logging")
    def test_port_from_env(
        self,
        mock_logging: MagicMock,
        mock_uvicorn: MagicMock,
        monkeypatch,
    ) -> None:
        monkeypatch.setenv("PORT", "8080")

        start([])

        assert mock_uvicorn.run.call_args.kwargs["port"] == 8080
