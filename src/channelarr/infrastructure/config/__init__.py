from __future__ import annotations

from .channels import CHANNELS
from .load import load_config
from .schema import AppConfig, EnvOverrides

__all__ = ["CHANNELS", "AppConfig", "EnvOverrides", "load_config"]
