"""Coverage data model.

File-centric model for LCOV record data: aggregate found/hit counters per
category plus one pre-rendered row per source file. All values exposed as
percentages are normalized to [0, 100].
"""

from __future__ import annotations

from dataclasses import dataclass, field


class CoverageParseError(Exception):
    """Error parsing coverage data."""

    pass


@dataclass(frozen=True, slots=True)
class CoverageCategory:
    """Found/hit counters for one of lines, functions or branches."""

    found: int = 0
    hit: int = 0


@dataclass(frozen=True, slots=True)
class CoverageTotals:
    """Counters summed across every record of one LCOV document."""

    lines: CoverageCategory = field(default_factory=CoverageCategory)
    functions: CoverageCategory = field(default_factory=CoverageCategory)
    branches: CoverageCategory = field(default_factory=CoverageCategory)

    def categories(self) -> tuple[CoverageCategory, CoverageCategory, CoverageCategory]:
        return (self.lines, self.functions, self.branches)


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Coverage row for a single source file.

    ``folder`` is the source path before the last ``/`` (empty when there is
    none). The ``missed_*`` strings are display-ready and empty when nothing
    was missed.
    """

    folder: str
    file: str
    lines_pct: float
    functions_pct: float
    branches_pct: float
    missed_lines: str = ""
    missed_functions: str = ""
    missed_branches: str = ""

    @property
    def path(self) -> str:
        return f"{self.folder}/{self.file}" if self.folder else self.file


@dataclass(frozen=True, slots=True)
class LcovDocument:
    """Parsed LCOV document: totals plus per-file rows in input order."""

    totals: CoverageTotals
    files: list[FileCoverage] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Coverage:
    """Result of coverage discovery."""

    percentage: float
    source: str
