"""CLI utilities."""

from pathlib import Path

import click

from covbadge.config.loader import load_config
from covbadge.config.models import CovBadgeConfig
from covbadge.core.errors import ConfigError
from covbadge.core.logging import configure_logging


def load_project_config(ctx: click.Context, path: Path) -> tuple[Path, CovBadgeConfig]:
    """Resolve the project folder, load its config and apply its logging setup.

    ``--verbose`` on the group forces DEBUG regardless of the configured level.

    Raises:
        click.ClickException: If the configuration is invalid.
    """
    project_root = path.resolve()
    try:
        config = load_config(project_root)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    logging_config = config.logging
    if ctx.obj and ctx.obj.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return project_root, config
