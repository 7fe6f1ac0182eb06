"""Run configuration expansion for ambiguous test targets."""

from idegateway.expansion.contracts import ConfigurationFactory, TaskDiscovery
from idegateway.expansion.discovery import GradleTaskDiscovery
from idegateway.expansion.gradle import GradleExpansionStrategy
from idegateway.expansion.models import (
    GRADLE_KIND,
    RunConfiguration,
    TaskDescriptor,
    TaskSettings,
)
from idegateway.expansion.pipeline import ExpansionPipeline, create_default_pipeline
from idegateway.expansion.registry import RunManager
from idegateway.expansion.strategy import ExpansionStrategy

__all__ = [
    "GRADLE_KIND",
    "ConfigurationFactory",
    "ExpansionPipeline",
    "ExpansionStrategy",
    "GradleExpansionStrategy",
    "GradleTaskDiscovery",
    "RunConfiguration",
    "RunManager",
    "TaskDescriptor",
    "TaskDiscovery",
    "TaskSettings",
    "create_default_pipeline",
]
