"""covbadge coverage-report command - render the HTML coverage report."""

from pathlib import Path

import click

from covbadge.cli.utils import load_project_config
from covbadge.core.progress import pluralize, spinner, status
from covbadge.coverage.discover import CoverageDiscoverer
from covbadge.coverage.models import CoverageParseError
from covbadge.coverage.parsers.lcov import LcovParser
from covbadge.coverage.report import write_html_report


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def coverage_report_command(ctx: click.Context, path: Path) -> None:
    """Render an HTML coverage report from the project's LCOV file.

    PATH is the project folder (default: current directory).
    """
    project_root, config = load_project_config(ctx, path)
    locations = CoverageDiscoverer(config.coverage, project_root)

    try:
        document = LcovParser().parse(locations.lcov_info_path)
    except CoverageParseError as e:
        raise click.ClickException(str(e)) from e

    with spinner("Rendering coverage report"):
        index_file = write_html_report(
            document,
            locations.report_folder,
            config.badges.colors,
            index_name=config.coverage.report_index_path,
        )

    status(
        f"Coverage report for {pluralize(len(document.files), 'file')} written to {index_file}",
        style="success",
    )
