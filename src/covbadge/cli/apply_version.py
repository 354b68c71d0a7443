"""covbadge apply-version command - stamp the project version into the repo."""

import asyncio
from pathlib import Path

import click

from covbadge.cli.utils import load_project_config
from covbadge.core.errors import ProjectError, ReleaseError
from covbadge.core.progress import status
from covbadge.project.release import apply_version


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Show generated content without writing it")
@click.pass_context
def apply_version_command(ctx: click.Context, path: Path, dry_run: bool) -> None:
    """Write the version module and release notes for the discovered version.

    PATH is the project folder (default: current directory). Existing release
    notes are left untouched.
    """
    project_root, config = load_project_config(ctx, path)

    try:
        applied = asyncio.run(apply_version(config, project_root, dry_run=dry_run))
    except (ProjectError, ReleaseError) as e:
        raise click.ClickException(f"Error during apply-version: {e.message}") from e

    project = applied.project
    if not dry_run:
        status(f"Version module written to {applied.version_module}", style="success")
    status(f"Applied version {project.version} for package {project.name}")
    status(f"apply-version completed: {project.name} v{project.version}", style="success")
