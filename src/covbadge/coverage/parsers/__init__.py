"""Coverage artifact parsers.

PARSER_BY_FORMAT maps each file-backed discovery source to the parser that
reduces its artifact to one percentage.
"""

from collections.abc import Sequence

from .base import CoverageParser, read_artifact
from .html_index import HtmlIndexParser, read_html_percent
from .lcov import LcovParser, aggregate_percent, parse_lcov
from .summary import SummaryParser, read_summary_percent

PARSER_REGISTRY: Sequence[CoverageParser] = (
    LcovParser(),
    SummaryParser(),
    HtmlIndexParser(),
)

PARSER_BY_FORMAT: dict[str, CoverageParser] = {p.format_id: p for p in PARSER_REGISTRY}

__all__ = [
    "PARSER_BY_FORMAT",
    "PARSER_REGISTRY",
    "CoverageParser",
    "HtmlIndexParser",
    "LcovParser",
    "SummaryParser",
    "aggregate_percent",
    "parse_lcov",
    "read_artifact",
    "read_html_percent",
    "read_summary_percent",
]
