"""Tests for idegw expand command."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from idegateway.cli.main import cli

runner = CliRunner()


def _gradle_project(root: Path, build_script: str) -> Path:
    (root / "settings.gradle").write_text("include 'app'\n")
    module = root / "app"
    module.mkdir()
    (module / "build.gradle").write_text(build_script)
    source = module / "src" / "test" / "java" / "MyTest.java"
    source.parent.mkdir(parents=True)
    source.write_text("class MyTest {}\n")
    return source


class TestExpandCommand:
    """Preview expansion for a source file."""

    def test_given_single_test_task_when_expand_then_unchanged(self, tmp_path: Path) -> None:
        source = _gradle_project(tmp_path, "plugins { id 'java' }\n")

        result = runner.invoke(cli, ["expand", str(source), "--project", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "MyTest" in result.output
        assert "(test)" not in result.output

    def test_given_extra_test_task_when_expand_then_one_row_per_task(
        self, tmp_path: Path
    ) -> None:
        # Given
        source = _gradle_project(
            tmp_path, "tasks.register('integrationTest', Test) {\n    useJUnitPlatform()\n}\n"
        )

        # When
        result = runner.invoke(
            cli,
            [
                "expand",
                str(source),
                "--project",
                str(tmp_path),
                "--tests",
                "MyTest",
            ],
        )

        # Then
        assert result.exit_code == 0, result.output
        assert "MyTest (test)" in result.output
        assert "MyTest (integrationTest)" in result.output
        assert ":app:integrationTest --tests MyTest" in result.output

    def test_name_option(self, tmp_path: Path) -> None:
        source = _gradle_project(tmp_path, "task slowTest(type: Test)\n")

        result = runner.invoke(
            cli, ["expand", str(source), "--project", str(tmp_path), "--name", "Suite"]
        )

        assert "Suite (slowTest)" in result.output

    def test_missing_file_rejected(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["expand", str(tmp_path / "nope.java")])

        assert result.exit_code == 2
