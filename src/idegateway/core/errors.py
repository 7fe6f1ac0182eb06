"""Errors raised by ide-gateway.

Every error carries an ``ErrorCode``; the thousands digit names the area
(2 = configuration, 3 = control server, 4 = run configuration expansion).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Stable numeric codes, grouped by area."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Server (3xxx)
    SERVER_BIND_FAILED = 3001
    SERVER_START_FAILED = 3002

    # Expansion (4xxx)
    EXPANSION_CLONE_FAILED = 4001
    EXPANSION_REGISTER_FAILED = 4002


@dataclass(frozen=True, slots=True)
class GatewayError(Exception):
    """Base error carrying a code and structured details."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form."""
        data: dict[str, Any] = {"code": int(self.code), "error": self.error_name}
        data.update(message=self.message, retryable=self.retryable, details=dict(self.details))
        return data

    def log_fields(self) -> dict[str, Any]:
        """Flat key/values for a structlog event."""
        return {"error_code": int(self.code), "error": self.message, **self.details}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GatewayError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ServerError(GatewayError):
    """Control server startup errors. Contained by the lifecycle manager."""

    @classmethod
    def bind_failed(cls, host: str, port: int, reason: str) -> "ServerError":
        return cls(
            code=ErrorCode.SERVER_BIND_FAILED,
            message=f"Cannot bind {host}:{port}: {reason}",
            retryable=True,
            details={"host": host, "port": port, "reason": reason},
        )

    @classmethod
    def start_failed(cls, reason: str) -> "ServerError":
        return cls(
            code=ErrorCode.SERVER_START_FAILED,
            message=f"Control server failed to start: {reason}",
            details={"reason": reason},
        )


class ExpansionError(GatewayError):
    """Failure while cloning or registering an expanded run configuration."""

    @classmethod
    def clone_failed(cls, config_name: str, label: str, reason: str) -> "ExpansionError":
        return cls(
            code=ErrorCode.EXPANSION_CLONE_FAILED,
            message=f"Failed to clone '{config_name}' for '{label}': {reason}",
            details={"config": config_name, "label": label, "reason": reason},
        )

    @classmethod
    def register_failed(cls, config_name: str, label: str, reason: str) -> "ExpansionError":
        return cls(
            code=ErrorCode.EXPANSION_REGISTER_FAILED,
            message=f"Failed to register '{config_name}' for '{label}': {reason}",
            details={"config": config_name, "label": label, "reason": reason},
        )

