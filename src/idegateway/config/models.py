"""Configuration models for ide-gateway.

Every field can be overridden from the environment using
``IDEGATEWAY__<SECTION>__<KEY>``, e.g.::

    IDEGATEWAY__LOGGING__LEVEL=DEBUG
    IDEGATEWAY__SERVER__PORT=3100

See ``config.loader`` for how sources are combined.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

STREAM_DESTINATIONS = ("stderr", "stdout")

DEFAULT_PORT = 3000
MIN_PORT = 1
MAX_PORT = 65535


def check_port(port: int) -> int:
    """Raise ValueError unless ``port`` is a usable TCP port number."""
    if port < MIN_PORT or port > MAX_PORT:
        raise ValueError(f"Port must be between {MIN_PORT} and {MAX_PORT}")
    return port


class LogOutputConfig(BaseModel):
    """One log destination: a stream name or an absolute file path."""

    destination: str = "stderr"
    format: Literal["json", "console"] = "console"
    level: LogLevel | None = None  # None: use LoggingConfig.level

    @field_validator("destination")
    @classmethod
    def _file_destination_is_absolute(cls, v: str) -> str:
        if v in STREAM_DESTINATIONS:
            return v
        expanded = Path(v).expanduser()
        if not expanded.is_absolute():
            raise ValueError(f"Log file must be an absolute path: {v}")
        return str(expanded)


class LoggingConfig(BaseModel):
    """Root level plus the list of outputs (stderr console by default)."""

    level: LogLevel = "INFO"
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServerConfig(BaseModel):
    """Control server binding.

    The port normally comes from the persisted settings file; setting
    IDEGATEWAY__SERVER__PORT overrides it for one run.
    """

    host: str = Field(
        default="127.0.0.1",
        description="Interface to listen on. Loopback only unless you need remote access.",
    )
    port: int = Field(default=DEFAULT_PORT, description="Control server TCP port.")
    stop_timeout_sec: float = Field(
        default=5.0,
        gt=0,
        description="Seconds stop waits for in-flight requests before forcing exit.",
    )

    @field_validator("port")
    @classmethod
    def _port_in_range(cls, v: int) -> int:
        return check_port(v)


class GatewayConfig(BaseModel):
    """Effective configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
