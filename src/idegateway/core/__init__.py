"""Core module exports."""

from idegateway.core.errors import (
    ConfigError,
    ErrorCode,
    ExpansionError,
    GatewayError,
    ServerError,
)
from idegateway.core.log_buffer import LogEntry, ServerLogBuffer, get_log_buffer
from idegateway.core.logging import (
    clear_request_id,
    configure_logging,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ExpansionError",
    "GatewayError",
    "ServerError",
    # Log buffer
    "LogEntry",
    "ServerLogBuffer",
    "get_log_buffer",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_request_id",
    "set_request_id",
]
