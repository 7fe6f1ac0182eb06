"""idegw expand command - preview how a Gradle test run is expanded."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from idegateway.core.errors import ExpansionError
from idegateway.expansion.models import GRADLE_KIND, RunConfiguration, TaskSettings
from idegateway.expansion.pipeline import create_default_pipeline
from idegateway.expansion.registry import RunManager


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Project root",
)
@click.option("--name", help="Configuration name (default: file stem)")
@click.option("--tests", "test_filter", help="Gradle --tests filter, e.g. com.example.MyTest")
def expand_command(
    file: Path,
    project: Path,
    name: str | None,
    test_filter: str | None,
) -> None:
    """Show the run configurations a test run of FILE expands to."""
    task_names = [":test"]
    if test_filter:
        task_names += ["--tests", test_filter]

    run_manager = RunManager()
    config = run_manager.add(
        RunConfiguration(
            name=name or file.stem,
            kind=GRADLE_KIND,
            factory_id=GRADLE_KIND,
            settings=TaskSettings(
                task_names=task_names,
                external_project_path=str(project.resolve()),
            ),
        )
    )

    pipeline = create_default_pipeline(run_manager)
    try:
        configs = pipeline.expand([config], file, project)
    except ExpansionError as e:
        raise click.ClickException(e.message) from e

    table = Table(title=f"Run configurations for {file.name}")
    table.add_column("Name")
    table.add_column("Tasks")
    for c in configs:
        table.add_row(c.name, " ".join(c.settings.task_names))
    Console().print(table)
