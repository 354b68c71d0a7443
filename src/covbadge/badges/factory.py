"""SVG badge rendering from a placeholder template.

Templates carry ``{{LABEL}}``, ``{{VALUE}}`` and ``{{COLOR}}`` placeholders.
Whitespace inside the braces is ignored and unknown placeholders are left
as they are, so a template can hold other ``{{...}}`` text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from xml.sax.saxutils import escape

from covbadge.core.errors import BadgeError
from covbadge.core.logging import get_logger
from covbadge.core.progress import status
from covbadge.data import get_badge_template_path

log = get_logger("badges.factory")

_PLACEHOLDER = re.compile(r"\{\{(.*?)\}\}")
# Attribute values are double-quoted in templates
_XML_ENTITIES = {'"': "&quot;"}


@dataclass(frozen=True, slots=True)
class Badge:
    """A generated (or, in dry-run, planned) badge."""

    name: str
    output_path: Path


def render_template(
    template: str,
    replacements: dict[str, str],
    *,
    xml_escape: bool = True,
) -> str:
    """Substitute known placeholders, XML-escaping values unless told not to."""

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1).strip()
        if key not in replacements:
            return match.group(0)
        value = replacements[key]
        return escape(value, _XML_ENTITIES) if xml_escape else value

    return _PLACEHOLDER.sub(_replace, template)


class BadgeFactory:
    """Create badges from one SVG template."""

    def __init__(self, template_path: Path | None = None) -> None:
        self._template_path = template_path or get_badge_template_path()

    @property
    def template_path(self) -> Path:
        return self._template_path

    def _read_template(self) -> str:
        try:
            return self._template_path.read_text(encoding="utf-8")
        except OSError as e:
            raise BadgeError.template_missing(str(self._template_path)) from e

    def create_badge(
        self,
        name: str,
        output_path: Path,
        label: str,
        value: str,
        color: str,
        *,
        dry_run: bool = False,
    ) -> Badge:
        """Render the template and write it to ``output_path``.

        Raises:
            BadgeError: If the template is missing or the badge cannot be written.
        """
        content = render_template(
            self._read_template(),
            {"LABEL": label, "VALUE": value, "COLOR": color},
        )
        badge = Badge(name=name, output_path=output_path)

        if dry_run:
            status(f"Skipping writing badge {name} to {output_path}", style="dry")
            log.info("badge_skipped", name=name, path=str(output_path), dry_run=True)
            return badge

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise BadgeError.write_failed(str(output_path), str(e)) from e

        log.info("badge_written", name=name, path=str(output_path), value=value)
        return badge
