"""Expansion pipeline: dispatches run configurations to strategies."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from idegateway.expansion.contracts import ConfigurationFactory, TaskDiscovery
from idegateway.expansion.discovery import GradleTaskDiscovery
from idegateway.expansion.gradle import GradleExpansionStrategy
from idegateway.expansion.models import RunConfiguration
from idegateway.expansion.strategy import ExpansionStrategy

logger = structlog.get_logger()


class ExpansionPipeline:
    """Replaces ambiguous run configurations with one entry per task.

    Each configuration goes to the first strategy that can handle it; the
    strategy's output is spliced in at the configuration's position.
    Configurations no strategy handles pass through unchanged.
    """

    def __init__(self, strategies: Sequence[ExpansionStrategy]) -> None:
        self.strategies = list(strategies)

    def strategy_for(self, config: RunConfiguration) -> ExpansionStrategy | None:
        for strategy in self.strategies:
            if strategy.can_handle(config):
                return strategy
        return None

    def expand(
        self,
        configs: Sequence[RunConfiguration],
        file: Path,
        project: Path,
    ) -> list[RunConfiguration]:
        """Expand ``configs`` for a test run of ``file`` in ``project``.

        Errors raised by a strategy propagate to the caller.
        """
        result: list[RunConfiguration] = []
        for config in configs:
            strategy = self.strategy_for(config)
            if strategy is None:
                result.append(config)
                continue
            result.extend(strategy.expand(config, file, project))

        logger.debug(
            "pipeline_expanded",
            file=str(file),
            input_count=len(configs),
            output_count=len(result),
        )
        return result


def create_default_pipeline(
    factory: ConfigurationFactory,
    discovery: TaskDiscovery | None = None,
) -> ExpansionPipeline:
    """Pipeline with the built-in strategies (currently Gradle)."""
    return ExpansionPipeline([GradleExpansionStrategy(discovery or GradleTaskDiscovery(), factory)])
