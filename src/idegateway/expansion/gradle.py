"""Gradle expansion strategy.

When a test class is matched by several Gradle test tasks (e.g. ``test``
and ``integrationTest``, or the same sources in several modules), one
Gradle run configuration is produced per task.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from idegateway.core.errors import ExpansionError
from idegateway.expansion.models import GRADLE_KIND, RunConfiguration
from idegateway.expansion.strategy import ExpansionStrategy

logger = structlog.get_logger()


def split_filter_args(task_names: list[str]) -> list[str]:
    """Return the inline test-filter arguments of a Gradle task list.

    Gradle configurations store filters inline with the tasks
    (``[":test", "--tests", "com.example.MyTest"]``). Everything from the
    first ``--`` token on is a filter argument.
    """
    for i, token in enumerate(task_names):
        if token.startswith("--"):
            return list(task_names[i:])
    return []


class GradleExpansionStrategy(ExpansionStrategy):
    """Fans a Gradle test configuration out over its candidate test tasks."""

    strategy_id = "gradle.test"
    kind = GRADLE_KIND

    def expand(self, config: RunConfiguration, file: Path, project: Path) -> list[RunConfiguration]:
        candidates = self.discovery.find_all_tasks(file, project)
        if len(candidates) <= 1:
            return [config]

        # Dropping the filter would run every test in the module
        filter_args = split_filter_args(config.settings.task_names)

        expanded: list[RunConfiguration] = []
        for candidate in candidates:
            try:
                cloned = self.factory.clone(config)
            except Exception as e:
                raise ExpansionError.clone_failed(config.name, candidate.label, str(e)) from e

            cloned.settings.task_names = [*candidate.tasks, *filter_args]
            cloned.name = f"{config.name} ({candidate.label})"

            try:
                handle = self.factory.create_and_register(cloned, config.factory_id)
            except Exception as e:
                raise ExpansionError.register_failed(config.name, candidate.label, str(e)) from e
            expanded.append(handle)

        logger.info(
            "configuration_expanded",
            strategy=self.strategy_id,
            name=config.name,
            file=str(file),
            count=len(expanded),
        )
        return expanded
