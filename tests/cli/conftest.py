"""Shared fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of config resolution."""
    for section, key in (("SERVER", "PORT"), ("SERVER", "HOST"), ("LOGGING", "LEVEL")):
        monkeypatch.delenv(f"IDEGATEWAY__{section}__{key}", raising=False)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "server_settings.yaml"
