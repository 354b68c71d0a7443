"""LCOV format parser.

LCOV format is a plain text format with one record per source file:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- BRDA:<line>,<block>,<branch>,<taken>   ('-' when the branch never ran)
- FN:<line>,<name>                       (lcov 2.x: FN:<line>,<end line>,<name>)
- FNDA:<hit count>,<name>
- LF:<lines found>
- LH:<lines hit>
- BRF:<branches found>
- BRH:<branches hit>
- FNF:<functions found>
- FNH:<functions hit>
- end_of_record

Used by: c8/istanbul, pytest-cov, cargo-llvm-cov, gcov, dart test
"""

import re
from dataclasses import dataclass
from pathlib import Path

from covbadge.coverage.models import (
    CoverageCategory,
    CoverageParseError,
    CoverageTotals,
    FileCoverage,
    LcovDocument,
)
from covbadge.coverage.parsers.base import read_artifact
from covbadge.coverage.percent import normalize_percent
from covbadge.coverage.ranges import RANGE_SEPARATOR, compress_ranges

RECORD_END = "end_of_record"
UNKNOWN_SOURCE = "unknown"

_COUNTER_KEYS = ("LF", "LH", "FNF", "FNH", "BRF", "BRH")
_NOT_TAKEN = ("0", "-")
# lcov 2.x inserts the end line: FN:<start>,<end>,<name>
_FN_END_LINE = re.compile(r"^\d+,(?P<name>.+)$")


@dataclass
class _Accumulator:
    """Running found/hit sums; frozen into CoverageTotals at the end."""

    lines_found: int = 0
    lines_hit: int = 0
    functions_found: int = 0
    functions_hit: int = 0
    branches_found: int = 0
    branches_hit: int = 0

    def add(self, counters: dict[str, int]) -> None:
        self.lines_found += counters["LF"]
        self.lines_hit += counters["LH"]
        self.functions_found += counters["FNF"]
        self.functions_hit += counters["FNH"]
        self.branches_found += counters["BRF"]
        self.branches_hit += counters["BRH"]

    def freeze(self) -> CoverageTotals:
        return CoverageTotals(
            lines=CoverageCategory(self.lines_found, self.lines_hit),
            functions=CoverageCategory(self.functions_found, self.functions_hit),
            branches=CoverageCategory(self.branches_found, self.branches_hit),
        )


def percent(hit: int, found: int) -> float:
    """Per-category percentage; a category with nothing found counts as 100%."""
    return normalize_percent(hit / found * 100 if found > 0 else 100)


def aggregate_percent(totals: CoverageTotals) -> float:
    """Unweighted mean over the categories that found anything.

    Raises:
        CoverageParseError: If every category found zero items.
    """
    percentages = [
        normalize_percent(category.hit / category.found * 100)
        for category in totals.categories()
        if category.found > 0
    ]
    if not percentages:
        raise CoverageParseError("Unable to parse coverage percentages from lcov info")
    return sum(percentages) / len(percentages)


def split_source_path(path: str) -> tuple[str, str]:
    """Split at the last '/' into (folder, file)."""
    folder, sep, file = path.rpartition("/")
    if not sep:
        return "", path
    return folder, file


def parse_lcov(content: str) -> LcovDocument:
    """Parse LCOV text into totals and one FileCoverage per record.

    Malformed content never raises: missing counters are 0 and a record
    without SF: is reported as "unknown".
    """
    totals = _Accumulator()
    files: list[FileCoverage] = []

    for record in content.split(RECORD_END):
        if not record.strip():
            continue
        lines = [line.strip() for line in record.splitlines()]

        source = _first_value(lines, "SF") or UNKNOWN_SOURCE
        folder, file = split_source_path(source)

        counters = {key: _to_int(_first_value(lines, key)) for key in _COUNTER_KEYS}
        totals.add(counters)

        lf, lh = counters["LF"], counters["LH"]
        fnf, fnh = counters["FNF"], counters["FNH"]
        brf, brh = counters["BRF"], counters["BRH"]

        files.append(
            FileCoverage(
                folder=folder,
                file=file,
                lines_pct=percent(lh, lf),
                functions_pct=percent(fnh, fnf),
                branches_pct=percent(brh, brf),
                missed_lines=_missed_lines(lines) if lh != lf else "",
                missed_functions=_missed_functions(lines) if fnh != fnf else "",
                missed_branches=_missed_branches(lines) if brh != brf else "",
            )
        )

    return LcovDocument(totals=totals.freeze(), files=files)


def _first_value(lines: list[str], key: str) -> str | None:
    prefix = f"{key}:"
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix) :].strip()
    return None


def _values(lines: list[str], key: str) -> list[list[str]]:
    """Comma-split payloads of every line with the given key."""
    prefix = f"{key}:"
    return [line[len(prefix) :].split(",") for line in lines if line.startswith(prefix)]


def _to_int(value: str | None) -> int:
    if value is None:
        return 0
    try:
        return max(int(value), 0)
    except ValueError:
        return 0


def _missed_lines(lines: list[str]) -> str:
    missed: set[int] = set()
    for parts in _values(lines, "DA"):
        if len(parts) >= 2 and parts[1].strip() == "0" and parts[0].strip().isdigit():
            missed.add(int(parts[0]))
    return compress_ranges(sorted(missed))


def _missed_branches(lines: list[str]) -> str:
    missed: set[int] = set()
    for parts in _values(lines, "BRDA"):
        if len(parts) >= 4 and parts[3].strip() in _NOT_TAKEN and parts[0].strip().isdigit():
            missed.add(int(parts[0]))
    return compress_ranges(sorted(missed))


def _missed_functions(lines: list[str]) -> str:
    declared: dict[str, str] = {}
    for line in lines:
        if not line.startswith("FN:"):
            continue
        start, sep, name = line[3:].partition(",")
        if not sep:
            continue
        if m := _FN_END_LINE.match(name):
            name = m.group("name")
        declared.setdefault(name.strip(), start.strip())

    missed: list[str] = []
    for line in lines:
        if not line.startswith("FNDA:"):
            continue
        hits, sep, name = line[5:].partition(",")
        if sep and hits.strip() == "0":
            name = name.strip()
            missed.append(f"{name} @ {declared.get(name, '?')}")
    return RANGE_SEPARATOR.join(missed)


class LcovParser:
    """Parser for LCOV format coverage files."""

    @property
    def format_id(self) -> str:
        return "lcov"

    @property
    def kind(self) -> str:
        return "LCOV"

    def parse(self, path: Path) -> LcovDocument:
        """Parse an LCOV file into totals and per-file rows."""
        return parse_lcov(read_artifact(path, self.kind))

    def percent_from_text(self, text: str) -> float:
        return aggregate_percent(parse_lcov(text).totals)
