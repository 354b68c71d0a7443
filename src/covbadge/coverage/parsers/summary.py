"""Istanbul coverage-summary.json parser.

Structure (only the field used here is shown):
{
  "total": {
    "lines": {"total": 120, "covered": 96, "skipped": 0, "pct": 80},
    ...
  },
  "/path/to/file.js": { ... }
}
"""

import json
from typing import Any

from covbadge.coverage.models import CoverageParseError


def read_summary_percent(text: str) -> float:
    """Return ``total.lines.pct`` from a coverage summary document.

    Raises:
        CoverageParseError: If the text is not JSON or the field is missing
            or not a number.
    """
    try:
        data: Any = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise CoverageParseError(f"Failed to parse coverage summary JSON: {e}") from e

    try:
        pct = data["total"]["lines"]["pct"]
    except (KeyError, TypeError) as e:
        raise CoverageParseError("Coverage summary has no total.lines.pct") from e

    if isinstance(pct, bool) or not isinstance(pct, int | float):
        raise CoverageParseError(f"Coverage summary total.lines.pct is not a number: {pct!r}")
    return float(pct)


class SummaryParser:
    """Parser for Istanbul json-summary output."""

    @property
    def format_id(self) -> str:
        return "summary"

    @property
    def kind(self) -> str:
        return "coverage summary"

    def percent_from_text(self, text: str) -> float:
        return read_summary_percent(text)
