"""Scraper for pre-rendered coverage HTML indexes (istanbul lcov-report).

The index page header carries one summary block per metric:

    <span class="strong">85.71% </span>
    <span class="quiet">Statements</span>
"""

import re

from covbadge.coverage.models import CoverageParseError
from covbadge.coverage.percent import is_percent, normalize_percent

LABELS = ("Statements", "Branches", "Functions", "Lines")

_PATTERN = re.compile(
    r'<span class="strong">\s*(?P<value>[\d.]+)%\s*</span>\s*'
    r'<span class="quiet">\s*(?P<label>' + "|".join(LABELS) + r")\s*</span>"
)


def read_html_percent(text: str) -> float:
    """Mean of the first valid percentage found for each summary label.

    Raises:
        CoverageParseError: If no label/value pair is present.
    """
    percentages: dict[str, float] = {}
    for match in _PATTERN.finditer(text):
        label = match.group("label").lower()
        if label in percentages:
            continue
        try:
            value = float(match.group("value"))
        except ValueError:
            continue
        if not is_percent(value):
            continue
        percentages[label] = normalize_percent(value)
        if len(percentages) == len(LABELS):
            break

    if not percentages:
        raise CoverageParseError("Unable to parse coverage percentages from report index")
    return sum(percentages.values()) / len(percentages)


class HtmlIndexParser:
    """Parser for istanbul's lcov-report/index.html."""

    @property
    def format_id(self) -> str:
        return "html"

    @property
    def kind(self) -> str:
        return "coverage report index"

    def percent_from_text(self, text: str) -> float:
        return read_html_percent(text)
