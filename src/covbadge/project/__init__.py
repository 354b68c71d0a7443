"""Project metadata discovery."""

from covbadge.project.discover import (
    Project,
    ProjectDiscoverer,
    ProjectParseError,
    discover_project,
    normalize_repository,
    project_from_package_json,
    project_from_pyproject,
)
from covbadge.project.release import AppliedVersion, NotesOutcome, apply_version

__all__ = [
    "AppliedVersion",
    "NotesOutcome",
    "Project",
    "ProjectDiscoverer",
    "ProjectParseError",
    "apply_version",
    "discover_project",
    "normalize_repository",
    "project_from_package_json",
    "project_from_pyproject",
]
