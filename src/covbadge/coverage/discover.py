"""Coverage discovery by racing independent sources.

Sources are started together and the first one to produce a percentage
wins; there is no priority between them. Candidates:

- override: ``coverage.percent`` from config/env
- lcov: mean of line/function/branch percentages from the LCOV file
- summary: ``total.lines.pct`` from coverage-summary.json
- html: mean of the summary blocks on the HTML report index

Each file-backed source reads its own file in the default executor; those
reads are the only suspension points. When a source wins, the remaining
tasks are cancelled and their results discarded. Reads that already started
run to completion in the background.
"""

from __future__ import annotations

import asyncio
import functools
import math
from collections.abc import Awaitable, Callable
from pathlib import Path

from covbadge.config.loader import resolve_path
from covbadge.config.models import CoverageConfig
from covbadge.core.errors import CoverageError
from covbadge.core.logging import get_logger
from covbadge.coverage.models import Coverage, CoverageParseError
from covbadge.coverage.parsers import PARSER_BY_FORMAT, CoverageParser, read_artifact
from covbadge.coverage.percent import normalize_percent

log = get_logger("coverage.discover")

_Outcome = tuple[str, float | None, Exception | None]


class CoverageDiscoverer:
    """Discover one coverage percentage for a project."""

    def __init__(self, config: CoverageConfig, project_root: Path) -> None:
        self._config = config
        self._project_root = project_root

    @property
    def lcov_info_path(self) -> Path:
        return resolve_path(self._project_root, self._config.folder, self._config.lcov_info_path)

    @property
    def summary_path(self) -> Path:
        return resolve_path(self._project_root, self._config.folder, self._config.summary_path)

    @property
    def report_folder(self) -> Path:
        return resolve_path(self._project_root, self._config.folder, self._config.report_folder)

    @property
    def report_index_path(self) -> Path:
        return resolve_path(self.report_folder, self._config.report_index_path)

    def artifact_path(self, format_id: str) -> Path:
        return {
            "lcov": self.lcov_info_path,
            "summary": self.summary_path,
            "html": self.report_index_path,
        }[format_id]

    def _candidates(self) -> dict[str, Callable[[], Awaitable[float]]]:
        candidates: dict[str, Callable[[], Awaitable[float]]] = {"override": self._from_override}
        for format_id, parser in PARSER_BY_FORMAT.items():
            path = self.artifact_path(format_id)
            candidates[format_id] = functools.partial(self._from_file, parser, path)
        return candidates

    async def discover(self) -> Coverage:
        """Return the first successful source's percentage, normalized.

        Raises:
            CoverageError: If every source failed. ``details["sources"]``
                maps each source to its failure reason.
        """
        tasks = [
            asyncio.create_task(_attempt(name, factory()), name=f"coverage-{name}")
            for name, factory in self._candidates().items()
        ]

        reasons: dict[str, str] = {}
        last_error: Exception | None = None
        try:
            for next_done in asyncio.as_completed(tasks):
                name, value, error = await next_done
                if error is None and value is not None:
                    coverage = Coverage(percentage=normalize_percent(value), source=name)
                    log.info(
                        "coverage_discovered",
                        source=name,
                        percentage=coverage.percentage,
                    )
                    return coverage
                reasons[name] = str(error)
                last_error = error
                log.debug("coverage_source_failed", source=name, reason=str(error))
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        raise CoverageError.not_found(reasons) from last_error

    async def _from_override(self) -> float:
        value = self._config.percent
        if value is None:
            raise CoverageParseError("Code coverage percentage not set in configuration")
        if not math.isfinite(value):
            raise CoverageParseError(f"Configured coverage percentage is not a number: {value}")
        return value

    async def _from_file(self, parser: CoverageParser, path: Path) -> float:
        loop = asyncio.get_running_loop()
        text = await loop.run_in_executor(None, read_artifact, path, parser.kind)
        return parser.percent_from_text(text)


async def _attempt(name: str, attempt: Awaitable[float]) -> _Outcome:
    """Run one source, reporting its failure as a value instead of raising.

    Cancellation still propagates so losing sources can be stopped.
    """
    try:
        return name, await attempt, None
    except CoverageParseError as e:
        return name, None, e
    except Exception as e:
        log.warning("coverage_source_crashed", source=name, error=type(e).__name__)
        return name, None, e


def discover_coverage(config: CoverageConfig, project_root: Path) -> Coverage:
    """Synchronous entry point for CLI commands."""
    return asyncio.run(CoverageDiscoverer(config, project_root).discover())
