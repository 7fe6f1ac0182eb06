"""Shared fixtures for expansion tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from idegateway.expansion.models import (
    GRADLE_KIND,
    RunConfiguration,
    TaskDescriptor,
    TaskSettings,
)


class StaticDiscovery:
    """TaskDiscovery returning a fixed candidate list."""

    def __init__(self, descriptors: list[TaskDescriptor]) -> None:
        self.descriptors = descriptors
        self.calls: list[tuple[Path, Path]] = []

    def find_all_tasks(self, file: Path, project: Path) -> list[TaskDescriptor]:
        self.calls.append((file, project))
        return list(self.descriptors)


MakeConfig = Callable[..., RunConfiguration]
MakeDiscovery = Callable[..., StaticDiscovery]


@pytest.fixture
def make_config() -> MakeConfig:
    """Build a Gradle run configuration (default tasks: [":test"])."""

    def _make(name: str = "MyTest", task_names: list[str] | None = None) -> RunConfiguration:
        return RunConfiguration(
            name=name,
            kind=GRADLE_KIND,
            factory_id=GRADLE_KIND,
            settings=TaskSettings(
                task_names=task_names if task_names is not None else [":test"]
            ),
        )

    return _make


@pytest.fixture
def make_discovery() -> MakeDiscovery:
    """Build a discovery from labels or (label, task) pairs.

    A bare label maps to the task ``:<label>:test``.
    """

    def _make(*candidates: str | tuple[str, str]) -> StaticDiscovery:
        descriptors = []
        for candidate in candidates:
            label, task = (
                candidate if isinstance(candidate, tuple) else (candidate, f":{candidate}:test")
            )
            descriptors.append(TaskDescriptor(tasks=(task,), label=label))
        return StaticDiscovery(descriptors)

    return _make


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "src" / "test" / "java" / "MyTest.java"
    path.parent.mkdir(parents=True)
    path.write_text("class MyTest {}\n")
    return path
