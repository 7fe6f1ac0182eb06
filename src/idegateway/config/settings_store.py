"""Persisted control server settings.

The store holds a single record (``ServerSettings``) with one field, the
control server port. It is loaded when the host starts, may be changed at
any time from the settings form, and is flushed when the host shuts down.

Settings are stored in ~/.config/idegateway/server_settings.yaml
"""

from __future__ import annotations

import threading
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from idegateway.config.models import DEFAULT_PORT, check_port
from idegateway.core.errors import ConfigError

logger = structlog.get_logger()

DEFAULT_SETTINGS_PATH = Path("~/.config/idegateway/server_settings.yaml").expanduser()

SETTINGS_HEADER = """\
# ide-gateway control server settings
# Edit via 'idegw port <N>' or the IDE settings form.

"""


class ServerSettings(BaseModel):
    """The persisted settings record."""

    port: int = Field(
        default=DEFAULT_PORT,
        description="Control server port. Takes effect on the next server start.",
    )

    @field_validator("port")
    @classmethod
    def _port_in_range(cls, v: int) -> int:
        return check_port(v)


def parse_port(text: str) -> int:
    """Validate port input from a settings form.

    Raises:
        ConfigError: If the text is not an integer in [1, 65535].
    """
    raw = text.strip()
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError.invalid_value("port", text, "Invalid port number") from None
    try:
        return check_port(port)
    except ValueError as e:
        raise ConfigError.invalid_value("port", text, str(e)) from None


class SettingsStore:
    """Thread-safe owner of the persisted port setting."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or DEFAULT_SETTINGS_PATH
        self._settings = ServerSettings()
        self._lock = threading.Lock()
        self._loaded = False

    def load(self) -> ServerSettings:
        """Load settings from disk, falling back to defaults.

        A missing file yields defaults. An unreadable or invalid file is
        logged and replaced by defaults so host startup is never blocked.
        """
        settings = ServerSettings()
        if self.path.exists():
            try:
                with self.path.open() as f:
                    data = yaml.safe_load(f) or {}
                settings = ServerSettings(**data)
            except (yaml.YAMLError, ValidationError, TypeError) as e:
                logger.warning("settings_load_failed", path=str(self.path), error=str(e))
        with self._lock:
            self._settings = settings
            self._loaded = True
        logger.debug("settings_loaded", path=str(self.path), port=settings.port)
        return settings

    def get_port(self) -> int:
        if not self._loaded:
            self.load()
        with self._lock:
            return self._settings.port

    def set_port(self, port: int) -> None:
        """Set the port. Out-of-range values are rejected and nothing changes."""
        try:
            updated = ServerSettings(port=port)
        except ValidationError as e:
            err = e.errors()[0]
            raise ConfigError.invalid_value("port", port, err["msg"]) from e
        with self._lock:
            self._settings = updated
            self._loaded = True
        logger.info("port_updated", port=port)

    def apply_port_text(self, text: str) -> int:
        """Validate form input and apply it. Returns the applied port."""
        port = parse_port(text)
        self.set_port(port)
        return port

    def is_modified(self, text: str) -> bool:
        """Whether form input differs from the stored port.

        Unparseable input counts as modified so the form offers to apply it
        (and then reports the validation error).
        """
        try:
            return int(text.strip()) != self.get_port()
        except ValueError:
            return True

    def flush(self) -> None:
        """Write the current settings to disk."""
        with self._lock:
            data = self._settings.model_dump()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = SETTINGS_HEADER + yaml.dump(data, default_flow_style=False, sort_keys=False)
        self.path.write_text(content)
        logger.debug("settings_flushed", path=str(self.path))
