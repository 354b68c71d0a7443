"""Packaged data files."""

from pathlib import Path

BADGE_TEMPLATE_NAME = "badge-template.svg"


def get_badge_template_path() -> Path:
    """Return the path of the default SVG badge template."""
    return Path(__file__).parent / BADGE_TEMPLATE_NAME


__all__ = ["BADGE_TEMPLATE_NAME", "get_badge_template_path"]
