"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import DEFAULT_USER_AGENT, PLAYER_LAUNCH_ARGS

Environment = Literal["dev", "test", "prod"]
RendererMode = Literal["browser", "http"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _section(name: str, section: str, key: str) -> AliasChoices:
    return AliasChoices(name, AliasPath(section, key))


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/playwright/resolver/refresh/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    - The channel table is compiled in (see channels.py) and not part of the config.
    """

    # General
    app_name: str = Field(default="channelarr", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )
    renderer: RendererMode = Field(
        default="browser",
        description="Page renderer strategy: headless 'browser' or raw 'http' fetch.",
    )

    # HTTP fetch (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=20.0,
        validation_alias=_section("http_timeout_seconds", "http", "timeout_seconds"),
        description="Timeout for the raw embed page fetch.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=_section("http_user_agent", "http", "user_agent"),
        description="Desktop browser User-Agent sent by both renderers.",
    )

    # Playwright (YAML section: playwright.*)
    playwright_headless: bool = Field(
        default=True,
        validation_alias=_section("playwright_headless", "playwright", "headless"),
        description="Run Chromium headless.",
    )
    playwright_navigation_timeout_ms: int = Field(
        default=45_000,
        validation_alias=_section(
            "playwright_navigation_timeout_ms", "playwright", "navigation_timeout_ms"
        ),
        description="Initial page load timeout in milliseconds.",
    )
    playwright_stealth: bool = Field(
        default=False,
        validation_alias=_section("playwright_stealth", "playwright", "stealth"),
        description="Apply playwright-stealth evasions to each browser context.",
    )
    playwright_launch_args: list[str] = Field(
        default_factory=lambda: list(PLAYER_LAUNCH_ARGS),
        validation_alias=_section(
            "playwright_launch_args", "playwright", "launch_args"
        ),
        description="Extra Chromium command-line switches.",
    )

    # Resolver budgets (YAML section: resolver.*)
    resolve_timeout_seconds: float = Field(
        default=90.0,
        validation_alias=_section(
            "resolve_timeout_seconds", "resolver", "timeout_seconds"
        ),
        description="Hard upper bound for one channel resolution.",
    )
    manifest_wait_seconds: float = Field(
        default=30.0,
        validation_alias=_section(
            "manifest_wait_seconds", "resolver", "manifest_wait_seconds"
        ),
        description="How long to wait for a manifest request after interaction.",
    )
    click_timeout_ms: int = Field(
        default=2_000,
        validation_alias=_section("click_timeout_ms", "resolver", "click_timeout_ms"),
        description="Timeout for each simulated click.",
    )
    click_pause_seconds: float = Field(
        default=0.5,
        validation_alias=_section(
            "click_pause_seconds", "resolver", "click_pause_seconds"
        ),
        description="Pause after each targeted play-button click.",
    )
    max_observed_requests: int = Field(
        default=50,
        validation_alias=_section(
            "max_observed_requests", "resolver", "max_observed_requests"
        ),
        description="Upper bound of manifest requests kept per resolution.",
    )

    # Periodic refresh (YAML section: refresh.*)
    refresh_interval_seconds: float = Field(
        default=3600.0,
        validation_alias=_section(
            "refresh_interval_seconds", "refresh", "interval_seconds"
        ),
        description="Period of the background refresh sweep.",
    )
    refresh_on_startup: bool = Field(
        default=True,
        validation_alias=_section("refresh_on_startup", "refresh", "on_startup"),
        description="Run one sweep immediately when the service starts.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=_section("log_level", "logging", "level"),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=_section("log_format", "logging", "format"),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator(
        "http_timeout_seconds",
        "resolve_timeout_seconds",
        "manifest_wait_seconds",
        "refresh_interval_seconds",
    )
    @classmethod
    def _validate_positive_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts and intervals must be > 0")
        return v

    @field_validator("playwright_navigation_timeout_ms", "click_timeout_ms")
    @classmethod
    def _validate_positive_ms(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("millisecond timeouts must be > 0")
        return v

    @field_validator("click_pause_seconds")
    @classmethod
    def _validate_pause(cls, v: float) -> float:
        if v < 0:
            raise ValueError("click_pause_seconds must be >= 0")
        return v

    @field_validator("max_observed_requests")
    @classmethod
    def _validate_max_observed(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_observed_requests must be >= 1")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        if self.manifest_wait_seconds > self.resolve_timeout_seconds:
            raise ValueError(
                "manifest_wait_seconds must not exceed resolve_timeout_seconds"
            )
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "renderer": self.renderer,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "playwright": {
                "headless": self.playwright_headless,
                "navigation_timeout_ms": self.playwright_navigation_timeout_ms,
                "stealth": self.playwright_stealth,
                "launch_args": list(self.playwright_launch_args),
            },
            "resolver": {
                "timeout_seconds": self.resolve_timeout_seconds,
                "manifest_wait_seconds": self.manifest_wait_seconds,
                "click_timeout_ms": self.click_timeout_ms,
                "click_pause_seconds": self.click_pause_seconds,
                "max_observed_requests": self.max_observed_requests,
            },
            "refresh": {
                "interval_seconds": self.refresh_interval_seconds,
                "on_startup": self.refresh_on_startup,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - CHANNELARR_RENDERER
    - CHANNELARR_HTTP_TIMEOUT_SECONDS
    - CHANNELARR_PLAYWRIGHT_HEADLESS
    - CHANNELARR_RESOLVE_TIMEOUT_SECONDS
    - CHANNELARR_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="CHANNELARR_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None
    renderer: Optional[RendererMode] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    playwright_headless: Optional[bool] = None
    playwright_navigation_timeout_ms: Optional[int] = None
    playwright_stealth: Optional[bool] = None
    playwright_launch_args: Optional[list[str]] = None

    resolve_timeout_seconds: Optional[float] = None
    manifest_wait_seconds: Optional[float] = None
    click_timeout_ms: Optional[int] = None
    click_pause_seconds: Optional[float] = None
    max_observed_requests: Optional[int] = None

    refresh_interval_seconds: Optional[float] = None
    refresh_on_startup: Optional[bool] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
