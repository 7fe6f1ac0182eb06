"""Gradle test task discovery from build files.

Finds the Gradle module that owns a source file and lists the ``Test``
tasks declared for it. This reads build scripts textually; it does not run
Gradle.
"""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from idegateway.expansion.models import TaskDescriptor

logger = structlog.get_logger()

BUILD_FILES = ("build.gradle", "build.gradle.kts")
SETTINGS_FILES = ("settings.gradle", "settings.gradle.kts")

DEFAULT_TEST_TASK = "test"

# Custom Test task declarations, Groovy and Kotlin DSL
_TEST_TASK_PATTERNS = [
    re.compile(r"""tasks\.(?:register|create)\(\s*["'](\w+)["']\s*,\s*Test\b"""),
    re.compile(r"""tasks\.(?:register|create)<Test>\(\s*["'](\w+)["']"""),
    re.compile(r"""\btask\s+(\w+)\s*\(\s*type\s*:\s*Test\s*\)"""),
    re.compile(r"""\bval\s+(\w+)\s+by\s+tasks\.(?:registering|creating)\(\s*Test::class"""),
]


def _has_any(directory: Path, names: tuple[str, ...]) -> bool:
    return any((directory / name).exists() for name in names)


def _ancestors_within(start: Path, project: Path) -> list[Path]:
    """``start`` and its parents, stopping at ``project`` (inclusive)."""
    result: list[Path] = []
    for directory in [start, *start.parents]:
        if not directory.is_relative_to(project):
            break
        result.append(directory)
        if directory == project:
            break
    return result


class GradleTaskDiscovery:
    """TaskDiscovery for Gradle builds laid out on disk."""

    def find_all_tasks(self, file: Path, project: Path) -> list[TaskDescriptor]:
        file = file.resolve()
        project = project.resolve()

        module_dir = self._find_module_dir(file, project)
        if module_dir is None:
            logger.debug("gradle_module_not_found", file=str(file))
            return []

        prefix = self._gradle_path(module_dir, project)
        return [
            TaskDescriptor(tasks=(f"{prefix}:{name}",), label=name)
            for name in self._test_task_names(module_dir)
        ]

    def _find_module_dir(self, file: Path, project: Path) -> Path | None:
        for directory in _ancestors_within(file.parent, project):
            if _has_any(directory, BUILD_FILES):
                return directory
        return None

    def _gradle_path(self, module_dir: Path, project: Path) -> str:
        """Gradle project path prefix: "" for the root project, ":a:b" otherwise."""
        root = module_dir
        for directory in _ancestors_within(module_dir, project):
            if _has_any(directory, SETTINGS_FILES):
                root = directory
                break
        rel = module_dir.relative_to(root)
        return "".join(f":{part}" for part in rel.parts)

    def _test_task_names(self, module_dir: Path) -> list[str]:
        names = [DEFAULT_TEST_TASK]
        for build_name in BUILD_FILES:
            build_file = module_dir / build_name
            if not build_file.exists():
                continue
            try:
                content = build_file.read_text()
            except OSError as e:
                logger.warning("gradle_build_unreadable", path=str(build_file), error=str(e))
                continue
            found: list[tuple[int, str]] = []
            for pattern in _TEST_TASK_PATTERNS:
                found.extend((m.start(), m.group(1)) for m in pattern.finditer(content))
            for _, name in sorted(found):
                if name not in names:
                    names.append(name)
        return names
