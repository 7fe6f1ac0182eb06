"""Host collaborators used by expansion strategies."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from idegateway.expansion.models import RunConfiguration, TaskDescriptor


class TaskDiscovery(Protocol):
    """Finds the build tasks able to run the tests in a source file."""

    def find_all_tasks(self, file: Path, project: Path) -> list[TaskDescriptor]:
        """Return candidate tasks in build-system order. May be empty."""
        ...


class ConfigurationFactory(Protocol):
    """Clones and registers run configurations with the host."""

    def clone(self, config: RunConfiguration) -> RunConfiguration:
        """Return a copy whose settings can be changed independently."""
        ...

    def create_and_register(self, config: RunConfiguration, factory_id: str) -> RunConfiguration:
        """Register ``config`` under ``factory_id`` and return the host handle."""
        ...
