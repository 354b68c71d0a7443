"""Coverage parser protocol."""

from pathlib import Path
from typing import Protocol

from covbadge.coverage.models import CoverageParseError


class CoverageParser(Protocol):
    """Protocol for coverage artifact parsers.

    Each parser handles one artifact format and reduces it to a single
    coverage percentage. Parsers raise CoverageParseError on anything they
    cannot use; discovery treats that as "this source lost the race".
    """

    @property
    def format_id(self) -> str:
        """Format identifier (e.g., 'lcov', 'summary')."""
        ...

    @property
    def kind(self) -> str:
        """Human-readable artifact name used in failure reasons."""
        ...

    def percent_from_text(self, text: str) -> float:
        """Extract a coverage percentage from the artifact's text.

        Raises:
            CoverageParseError: If the text holds no usable percentage.
        """
        ...


def read_artifact(path: Path, kind: str) -> str:
    """Read a coverage artifact as UTF-8, mapping I/O failures to CoverageParseError."""
    try:
        if not path.is_file():
            raise CoverageParseError(f"{kind} file not found: {path}")
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CoverageParseError(f"Failed to read {kind} file: {e}") from e
