"""Config module exports."""

from idegateway.config.loader import load_config
from idegateway.config.models import (
    DEFAULT_PORT,
    GatewayConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
)
from idegateway.config.settings_store import ServerSettings, SettingsStore, parse_port

__all__ = [
    "load_config",
    "DEFAULT_PORT",
    "GatewayConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ServerConfig",
    "ServerSettings",
    "SettingsStore",
    "parse_port",
]
