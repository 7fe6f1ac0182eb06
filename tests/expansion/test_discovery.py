"""Tests for Gradle task discovery from build files."""

from __future__ import annotations

from pathlib import Path

import pytest

from idegateway.expansion.discovery import GradleTaskDiscovery
from idegateway.expansion.models import TaskDescriptor


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def discovery() -> GradleTaskDiscovery:
    return GradleTaskDiscovery()


class TestModuleResolution:
    """Finding the owning module and its Gradle path."""

    def test_given_no_build_file_when_discover_then_empty(
        self, discovery: GradleTaskDiscovery, tmp_path: Path
    ) -> None:
        source = _write(tmp_path / "src" / "test" / "java" / "MyTest.java")

        assert discovery.find_all_tasks(source, tmp_path) == []

    def test_given_root_project_when_discover_then_root_task(
        self, discovery: GradleTaskDiscovery, tmp_path: Path
    ) -> None:
        # Given
        _write(tmp_path / "settings.gradle", "rootProject.name = 'demo'\n")
        _write(tmp_path / "build.gradle", "plugins { id 'java' }\n")
        source = _write(tmp_path / "src" / "test" / "java" / "MyTest.java")

        # When
        result = discovery.find_all_tasks(source, tmp_path)

        # Then
        assert result == [TaskDescriptor(tasks=(":test",), label="test")]

    def test_given_nested_module_when_discover_then_gradle_path_prefixed(
        self, discovery: GradleTaskDiscovery, tmp_path: Path
    ) -> None:
        _write(tmp_path / "settings.gradle.kts", 'include(":services:api")\n')
        _write(tmp_path / "build.gradle.kts")
        _write(tmp_path / "services" / "api" / "build.gradle.kts")
        source = _write(tmp_path / "services" / "api" / "src" / "test" / "kotlin" / "ApiTest.kt")

        result = discovery.find_all_tasks(source, tmp_path)

        assert result == [TaskDescriptor(tasks=(":services:api:test",), label="test")]

    def test_build_file_outside_project_ignored(
        self, discovery: GradleTaskDiscovery, tmp_path: Path
    ) -> None:
        _write(tmp_path / "build.gradle")
        project = tmp_path / "project"
        source = _write(project / "src" / "test" / "java" / "MyTest.java")

        assert discovery.find_all_tasks(source, project) == []


class TestTestTasks:
    """Custom Test task declarations."""

    @pytest.mark.parametrize(
        ("build_name", "content"),
        [
            ("build.gradle", "tasks.register('integrationTest', Test) {\n}\n"),
            ("build.gradle", "task integrationTest(type: Test) {\n}\n"),
            ("build.gradle.kts", 'tasks.register<Test>("integrationTest") {\n}\n'),
            ("build.gradle.kts", 'val integrationTest by tasks.registering(Test::class) {\n}\n'),
        ],
    )
    def test_declared_test_task_found(
        self, discovery: GradleTaskDiscovery, tmp_path: Path, build_name: str, content: str
    ) -> None:
        # Given
        _write(tmp_path / "settings.gradle")
        _write(tmp_path / "app" / build_name, content)
        source = _write(tmp_path / "app" / "src" / "test" / "java" / "MyTest.java")

        # When
        result = discovery.find_all_tasks(source, tmp_path)

        # Then
        assert result == [
            TaskDescriptor(tasks=(":app:test",), label="test"),
            TaskDescriptor(tasks=(":app:integrationTest",), label="integrationTest"),
        ]

    def test_tasks_in_declaration_order_without_duplicates(
        self, discovery: GradleTaskDiscovery, tmp_path: Path
    ) -> None:
        _write(
            tmp_path / "build.gradle",
            "task slowTest(type: Test)\n"
            "tasks.register('fastTest', Test)\n"
            "tasks.create('test', Test)\n"
            "task slowTest(type: Test)\n",
        )
        source = _write(tmp_path / "src" / "test" / "java" / "MyTest.java")

        result = discovery.find_all_tasks(source, tmp_path)

        assert [d.label for d in result] == ["test", "slowTest", "fastTest"]

    def test_non_test_tasks_ignored(self, discovery: GradleTaskDiscovery, tmp_path: Path) -> None:
        _write(tmp_path / "build.gradle", "tasks.register('docs', Javadoc)\n")
        source = _write(tmp_path / "src" / "test" / "java" / "MyTest.java")

        assert [d.label for d in discovery.find_all_tasks(source, tmp_path)] == ["test"]
