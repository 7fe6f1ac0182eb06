"""Resolve the effective ``GatewayConfig`` with pydantic-settings.

Sources, first wins:
1. Keyword overrides passed to ``load_config``
2. Environment variables (IDEGATEWAY__SECTION__KEY)
3. The persisted settings file (server_settings.yaml), whose ``port`` key
   feeds ``server.port``
4. Model defaults
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from idegateway.config.models import GatewayConfig, LoggingConfig, ServerConfig
from idegateway.config.settings_store import DEFAULT_SETTINGS_PATH
from idegateway.core.errors import ConfigError


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "expected a mapping at the top level")
    return data


class _SettingsFileSource(PydanticBaseSettingsSource):
    """Maps the flat settings file onto the nested config sections."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path) -> None:
        super().__init__(settings_cls)
        raw = _read_settings_file(path)
        self._sections: dict[str, Any] = {}
        if "port" in raw:
            self._sections["server"] = {"port": raw["port"]}

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._sections.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


def _settings_class_for(path: Path) -> type[BaseSettings]:
    """Build a settings class bound to one settings file.

    A class per call keeps concurrent loads of different files apart.
    """

    class GatewaySettings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix="IDEGATEWAY__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        server: ServerConfig = ServerConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _SettingsFileSource(settings_cls, path))

    return GatewaySettings


def load_config(settings_path: Path | None = None, **kwargs: Any) -> GatewayConfig:
    """Load the effective configuration.

    Args:
        settings_path: Persisted settings file. Defaults to the user config dir.
        **kwargs: Section overrides, e.g. ``server={"port": 3100}``.

    Raises:
        ConfigError: If the settings file is not valid YAML or a value fails
            validation.
    """
    settings_cls = _settings_class_for(settings_path or DEFAULT_SETTINGS_PATH)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(location, first.get("input"), first["msg"]) from e
    return GatewayConfig.model_validate(settings.model_dump())
