"""Stamp the discovered project version into the repository.

Two outputs:

- a generated Python module holding ``NAME`` and ``VERSION``, rewritten on
  every run;
- ``release-notes-v<version>.md`` rendered from a Markdown template with
  ``{{NAME}}``, ``{{VERSION}}`` and ``{{REPOSITORY}}`` placeholders. Notes
  that already exist are never overwritten, and a missing template only
  skips the notes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from covbadge.badges.factory import render_template
from covbadge.config.loader import resolve_path
from covbadge.config.models import CovBadgeConfig
from covbadge.core.errors import ReleaseError
from covbadge.core.logging import get_logger
from covbadge.core.progress import get_console, status
from covbadge.project.discover import Project, ProjectDiscoverer

log = get_logger("project.release")


class NotesOutcome(StrEnum):
    WRITTEN = "written"
    PLANNED = "planned"
    EXISTS = "exists"
    NO_TEMPLATE = "no_template"


@dataclass(frozen=True, slots=True)
class AppliedVersion:
    """What apply-version did (or, in dry-run, would do)."""

    project: Project
    version_module: Path
    notes_path: Path
    notes: NotesOutcome
    dry_run: bool = False


def release_notes_name(version: str) -> str:
    return f"release-notes-v{version}.md"


def render_version_module(project: Project) -> str:
    # json string literals are valid Python string literals
    return (
        "# generated file - do not edit\n"
        f"NAME = {json.dumps(project.name)}\n"
        f"VERSION = {json.dumps(project.version)}\n"
    )


def render_release_notes(template: str, project: Project) -> str:
    return render_template(
        template,
        {
            "NAME": project.name,
            "VERSION": project.version,
            "REPOSITORY": project.repository or "",
        },
        xml_escape=False,
    )


def _write(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReleaseError.write_failed(str(path), str(e)) from e


def _show_dry(message: str, content: str) -> None:
    status(message, style="dry")
    get_console().print(content, markup=False, highlight=False)


def write_version_module(project: Project, path: Path, *, dry_run: bool = False) -> None:
    """Write the generated version module.

    Raises:
        ReleaseError: If the module cannot be written.
    """
    content = render_version_module(project)
    if dry_run:
        _show_dry(f"Dry run enabled - not writing {path}", content)
        return
    _write(path, content)
    log.info("version_module_written", path=str(path), version=project.version)


def write_release_notes(
    project: Project,
    template_path: Path,
    output_folder: Path,
    *,
    dry_run: bool = False,
) -> tuple[Path, NotesOutcome]:
    """Render release notes for ``project.version`` unless they already exist.

    Raises:
        ReleaseError: If the notes cannot be written.
    """
    output_path = output_folder / release_notes_name(project.version)

    if not template_path.is_file():
        status(f"Release notes template not found at {template_path}", style="warning")
        log.warning("release_notes_template_missing", path=str(template_path))
        return output_path, NotesOutcome.NO_TEMPLATE

    if output_path.exists():
        status(
            f"Release notes for version {project.version} already exist at {output_path}"
        )
        return output_path, NotesOutcome.EXISTS

    try:
        template = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReleaseError.write_failed(str(output_path), f"cannot read template: {e}") from e
    content = render_release_notes(template, project)

    if dry_run:
        _show_dry("Dry run enabled - not writing release notes file", content)
        return output_path, NotesOutcome.PLANNED

    _write(output_path, content)
    status(f"Created release notes at {output_path}", style="success")
    log.info("release_notes_written", path=str(output_path), version=project.version)
    return output_path, NotesOutcome.WRITTEN


async def apply_version(
    config: CovBadgeConfig, project_root: Path, *, dry_run: bool = False
) -> AppliedVersion:
    """Discover the project, then write its version module and release notes.

    Raises:
        ProjectError: If no project metadata could be discovered.
        ReleaseError: If an output cannot be written.
    """
    project = await ProjectDiscoverer(config.project, project_root).discover()
    release = config.release

    version_module = resolve_path(project_root, release.version_module_path)
    write_version_module(project, version_module, dry_run=dry_run)

    notes_path, notes = write_release_notes(
        project,
        resolve_path(project_root, release.notes_template_path),
        resolve_path(project_root, release.notes_folder),
        dry_run=dry_run,
    )
    return AppliedVersion(
        project=project,
        version_module=version_module,
        notes_path=notes_path,
        notes=notes,
        dry_run=dry_run,
    )
