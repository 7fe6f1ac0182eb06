"""Run configuration expansion models.

A run configuration pairs a display name with a build-system specific
settings object. Expansion clones configurations; it never edits the ones
it is given.
"""

from __future__ import annotations

from dataclasses import dataclass, field

GRADLE_KIND = "gradle"


# =============================================================================
# Run Configurations
# =============================================================================


@dataclass
class TaskSettings:
    """Build-system settings carried by a run configuration.

    ``task_names`` holds the tasks to execute, optionally followed by inline
    arguments such as ``--tests com.example.MyTest``.
    """

    task_names: list[str] = field(default_factory=list)
    external_project_path: str | None = None


@dataclass
class RunConfiguration:
    """A runnable configuration as held by the host's registry."""

    name: str
    kind: str  # Build-system kind, e.g. "gradle", "junit"
    factory_id: str
    settings: TaskSettings = field(default_factory=TaskSettings)
    config_id: str | None = None  # Assigned on registration


# =============================================================================
# Discovery
# =============================================================================


@dataclass(frozen=True)
class TaskDescriptor:
    """A build task that can run the tests of a source file."""

    tasks: tuple[str, ...]
    label: str
