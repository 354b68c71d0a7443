"""covbadge generate command - write coverage and version badges."""

import asyncio
from pathlib import Path

import click

from covbadge.badges.ops import generate_badges
from covbadge.cli.utils import load_project_config
from covbadge.core.errors import InternalError
from covbadge.core.progress import pluralize, status


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Render badges without writing them")
@click.pass_context
def generate_command(ctx: click.Context, path: Path, dry_run: bool) -> None:
    """Generate SVG badges for the project.

    PATH is the project folder (default: current directory). Badges that
    cannot be built are reported and skipped.
    """
    project_root, config = load_project_config(ctx, path)

    try:
        badges = asyncio.run(generate_badges(config, project_root, dry_run=dry_run))
    except InternalError as e:
        raise click.ClickException(e.message) from e

    if not badges:
        status("No badges generated", style="warning")
        return

    for badge in badges:
        if dry_run:
            status(f"Badge {badge.name} would be written to {badge.output_path}", style="dry")
        else:
            status(f"Badge {badge.name} generated at {badge.output_path}", style="success")
    status(pluralize(len(badges), "badge") + (" planned" if dry_run else " generated"))
