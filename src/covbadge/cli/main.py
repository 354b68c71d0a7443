"""covbadge CLI - covbadge command."""

import click

from covbadge.cli.apply_version import apply_version_command
from covbadge.cli.discover import discover_command
from covbadge.cli.gate import coverage_gate_command
from covbadge.cli.generate import generate_command
from covbadge.cli.report import coverage_report_command
from covbadge.core.logging import configure_logging, set_run_id


@click.group()
@click.version_option(version="0.1.0", prog_name="covbadge")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """covbadge - Coverage badges, HTML reports and coverage gates."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    set_run_id()
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(discover_command, name="discover")
cli.add_command(generate_command, name="generate")
cli.add_command(coverage_report_command, name="coverage-report")
cli.add_command(coverage_gate_command, name="coverage-gate")
cli.add_command(apply_version_command, name="apply-version")


if __name__ == "__main__":
    cli()
