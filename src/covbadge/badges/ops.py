"""Badge generation for a project.

Builds every badge concurrently and keeps whichever succeed: one failing
badge (no coverage data, no manifest) never blocks the others.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable
from pathlib import Path

from covbadge.badges.factory import Badge, BadgeFactory
from covbadge.config.loader import resolve_path
from covbadge.config.models import CovBadgeConfig
from covbadge.core.errors import CovBadgeError, InternalError
from covbadge.core.logging import get_logger
from covbadge.core.progress import status
from covbadge.coverage.discover import CoverageDiscoverer
from covbadge.coverage.percent import color_for_percent, format_percent
from covbadge.project.discover import ProjectDiscoverer

log = get_logger("badges.ops")

COVERAGE_BADGE = "coverage-summary"
VERSION_BADGE = "version"


class BadgeOps:
    """Generate the coverage and version badges for one project."""

    def __init__(self, config: CovBadgeConfig, project_root: Path) -> None:
        self._config = config
        self._project_root = project_root
        template = config.badges.template_path
        self._factory = BadgeFactory(resolve_path(project_root, template) if template else None)

    def _badge_path(self, name: str) -> Path:
        return resolve_path(self._project_root, self._config.badges.folder, name)

    async def _create(
        self, name: str, output_path: Path, label: str, value: str, color: str, dry_run: bool
    ) -> Badge:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            functools.partial(
                self._factory.create_badge,
                name,
                output_path,
                label,
                value,
                color,
                dry_run=dry_run,
            ),
        )

    async def coverage_badge(self, *, dry_run: bool = False) -> Badge:
        coverage = await CoverageDiscoverer(self._config.coverage, self._project_root).discover()
        return await self._create(
            COVERAGE_BADGE,
            self._badge_path(self._config.badges.coverage_badge_path),
            "coverage",
            format_percent(coverage.percentage),
            color_for_percent(coverage.percentage, self._config.badges.colors),
            dry_run,
        )

    async def version_badge(self, *, dry_run: bool = False) -> Badge:
        project = await ProjectDiscoverer(self._config.project, self._project_root).discover()
        return await self._create(
            VERSION_BADGE,
            self._badge_path(self._config.badges.version_badge_path),
            "version",
            project.version,
            color_for_percent(100, self._config.badges.colors),
            dry_run,
        )

    async def generate(self, *, dry_run: bool = False) -> list[Badge]:
        """Generate all badges, returning the ones that succeeded.

        CovBadgeError from a single badge is logged and skipped. Any other
        exception aborts generation as InternalError.
        """
        builders: dict[str, Awaitable[Badge]] = {
            VERSION_BADGE: self.version_badge(dry_run=dry_run),
            COVERAGE_BADGE: self.coverage_badge(dry_run=dry_run),
        }
        results = await asyncio.gather(*builders.values(), return_exceptions=True)

        badges: list[Badge] = []
        for name, result in zip(builders, results, strict=True):
            if isinstance(result, CovBadgeError):
                log.warning("badge_failed", name=name, error=result.to_dict())
                status(f"Unable to generate {name} badge: {result.message}", style="warning")
            elif isinstance(result, Exception):
                raise InternalError.unexpected(str(result), badge=name) from result
            elif isinstance(result, BaseException):
                raise result
            else:
                badges.append(result)
        return badges


async def generate_badges(
    config: CovBadgeConfig, project_root: Path, *, dry_run: bool = False
) -> list[Badge]:
    """Generate every badge for the project, skipping the ones that fail."""
    return await BadgeOps(config, project_root).generate(dry_run=dry_run)
