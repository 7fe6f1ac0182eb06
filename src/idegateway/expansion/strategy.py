"""Expansion strategy base class.

A strategy owns one build system's run configuration kind. It decides
whether a configuration is ambiguous for a file and, if so, fans it out
into one configuration per discovered task.
"""

from __future__ import annotations

import abc
from pathlib import Path

from idegateway.expansion.contracts import ConfigurationFactory, TaskDiscovery
from idegateway.expansion.models import RunConfiguration


class ExpansionStrategy(abc.ABC):
    """Base class for build-system expansion strategies."""

    strategy_id: str  # e.g., "gradle.test"
    kind: str  # RunConfiguration.kind this strategy handles

    def __init__(self, discovery: TaskDiscovery, factory: ConfigurationFactory) -> None:
        self.discovery = discovery
        self.factory = factory

    def can_handle(self, config: RunConfiguration) -> bool:
        """Check if ``config`` belongs to this strategy's build system."""
        return config.kind == self.kind

    @abc.abstractmethod
    def expand(self, config: RunConfiguration, file: Path, project: Path) -> list[RunConfiguration]:
        """Expand ``config`` for ``file``.

        Returns ``[config]`` itself when at most one task applies, otherwise
        one newly registered configuration per task in discovery order.

        Raises:
            ExpansionError: If cloning or registering a configuration fails.
                Configurations registered earlier in the same call stay
                registered.
        """
