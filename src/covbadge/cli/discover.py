"""covbadge discover command - show project and coverage discovery results."""

from pathlib import Path

import click

from covbadge.cli.utils import load_project_config
from covbadge.core.errors import CoverageError, ProjectError
from covbadge.core.progress import spinner, status
from covbadge.coverage.discover import discover_coverage
from covbadge.coverage.percent import format_percent
from covbadge.project.discover import discover_project


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def discover_command(ctx: click.Context, path: Path) -> None:
    """Discover project metadata and code coverage.

    PATH is the project folder (default: current directory). A failure in
    either discovery is reported without failing the command.
    """
    project_root, config = load_project_config(ctx, path)

    try:
        project = discover_project(project_root, config.project)
    except ProjectError as e:
        status(e.message, style="error")
    else:
        status(f"Discovered project: {project.name}, version: {project.version}", style="success")
        if project.repository:
            status(f"Repository: {project.repository}", indent=2)

    try:
        with spinner("Discovering coverage"):
            coverage = discover_coverage(config.coverage, project_root)
    except CoverageError as e:
        status(e.message, style="error")
    else:
        status(
            f"Discovered code coverage: {format_percent(coverage.percentage)} "
            f"(from {coverage.source})",
            style="success",
        )
