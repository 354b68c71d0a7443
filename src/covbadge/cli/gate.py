"""covbadge coverage-gate command - fail when coverage is below a minimum."""

from pathlib import Path

import click

from covbadge.cli.utils import load_project_config
from covbadge.core.errors import ConfigError, CoverageError
from covbadge.core.progress import status
from covbadge.coverage.discover import discover_coverage
from covbadge.coverage.gate import check_gate, resolve_required
from covbadge.coverage.percent import format_percent


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--required-coverage",
    type=float,
    default=None,
    help="Minimum coverage percentage (overrides coverage.required)",
)
@click.pass_context
def coverage_gate_command(ctx: click.Context, path: Path, required_coverage: float | None) -> None:
    """Check discovered coverage against the required minimum.

    PATH is the project folder (default: current directory). Exits non-zero
    when coverage is below the gate. A gate of 0 skips the check.
    """
    project_root, config = load_project_config(ctx, path)

    try:
        required = resolve_required(required_coverage, config.coverage.required)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    if required <= 0:
        status("No coverage gate configured, skipping check")
        return

    try:
        coverage = discover_coverage(config.coverage, project_root)
        check_gate(coverage.percentage, required)
    except CoverageError as e:
        raise click.ClickException(e.message) from e

    status(
        f"Code coverage gate passed: {format_percent(coverage.percentage)} "
        f">= {format_percent(required)}",
        style="success",
    )
