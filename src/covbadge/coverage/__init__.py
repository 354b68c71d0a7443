"""Coverage discovery, parsing and HTML reporting."""

from covbadge.coverage.discover import CoverageDiscoverer, discover_coverage
from covbadge.coverage.gate import check_gate, resolve_required
from covbadge.coverage.models import (
    Coverage,
    CoverageCategory,
    CoverageParseError,
    CoverageTotals,
    FileCoverage,
    LcovDocument,
)
from covbadge.coverage.percent import (
    ColorBucket,
    bucket_for_percent,
    color_for_percent,
    format_percent,
    is_percent,
    normalize_percent,
)
from covbadge.coverage.ranges import RANGE_SEPARATOR, compress_ranges
from covbadge.coverage.report import render_html_report, write_html_report

__all__ = [
    "RANGE_SEPARATOR",
    "ColorBucket",
    "Coverage",
    "CoverageCategory",
    "CoverageDiscoverer",
    "CoverageParseError",
    "CoverageTotals",
    "FileCoverage",
    "LcovDocument",
    "bucket_for_percent",
    "check_gate",
    "color_for_percent",
    "compress_ranges",
    "discover_coverage",
    "format_percent",
    "is_percent",
    "normalize_percent",
    "render_html_report",
    "resolve_required",
    "write_html_report",
]
