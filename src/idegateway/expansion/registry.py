"""In-memory run configuration registry."""

from __future__ import annotations

import copy
import itertools
import threading

import structlog

from idegateway.expansion.models import RunConfiguration

logger = structlog.get_logger()


class RunManager:
    """Holds the run configurations known to a project.

    Implements the ConfigurationFactory contract used by expansion
    strategies: ``clone`` deep-copies, ``create_and_register`` assigns an id
    and records the configuration.
    """

    def __init__(self) -> None:
        self._configs: list[RunConfiguration] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def clone(self, config: RunConfiguration) -> RunConfiguration:
        cloned = copy.deepcopy(config)
        cloned.config_id = None
        return cloned

    def create_and_register(self, config: RunConfiguration, factory_id: str) -> RunConfiguration:
        with self._lock:
            config.factory_id = factory_id
            config.config_id = f"{factory_id}-{next(self._ids)}"
            self._configs.append(config)
        logger.debug("configuration_registered", name=config.name, config_id=config.config_id)
        return config

    def add(self, config: RunConfiguration) -> RunConfiguration:
        """Register a user-authored configuration under its own factory."""
        return self.create_and_register(config, config.factory_id)

    def all(self) -> list[RunConfiguration]:
        with self._lock:
            return list(self._configs)
