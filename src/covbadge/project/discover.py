"""Project metadata discovery.

Reads name, version and repository URL from whichever manifest yields them
first:

- pyproject.toml: ``[project]`` name/version, ``[project.urls]``
  Repository, Source or Homepage
- package.json: ``name``, ``version``, ``repository`` (object with ``url``
  or a plain string)

Like coverage discovery this is a race with no priority between sources.
"""

from __future__ import annotations

import asyncio
import json
import tomllib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from covbadge.config.loader import resolve_path
from covbadge.config.models import ProjectConfig
from covbadge.core.errors import ProjectError
from covbadge.core.logging import get_logger

log = get_logger("project.discover")

_URL_KEYS = ("repository", "source", "homepage")


class ProjectParseError(Exception):
    """A manifest is missing, unreadable or lacks name/version."""

    pass


@dataclass(frozen=True, slots=True)
class Project:
    """Project identity used for the version badge."""

    name: str
    version: str
    repository: str | None = None


def normalize_repository(url: Any) -> str | None:
    """Trim a repository URL, dropping a ``git+`` prefix and ``.git`` suffix."""
    if not isinstance(url, str) or not url.strip():
        return None
    repository = url.strip()
    if repository.endswith(".git"):
        repository = repository[: -len(".git")]
    if repository.startswith("git+"):
        repository = repository[len("git+") :]
    return repository.strip() or None


def _require_identity(data: dict[str, Any], source: str) -> tuple[str, str]:
    name, version = data.get("name"), data.get("version")
    if not (isinstance(name, str) and name.strip()):
        raise ProjectParseError(f"Invalid name in {source}")
    if not (isinstance(version, str) and version.strip()):
        raise ProjectParseError(f"Invalid version in {source}")
    return name.strip(), version.strip()


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise ProjectParseError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectParseError(f"Failed to read {path}: {e}") from e


def project_from_pyproject(text: str) -> Project:
    """Build a Project from pyproject.toml text.

    Raises:
        ProjectParseError: On invalid TOML, a missing ``[project]`` table or
            a dynamic/missing name or version.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ProjectParseError(f"Failed to parse pyproject.toml: {e}") from e

    table = data.get("project")
    if not isinstance(table, dict):
        raise ProjectParseError("pyproject.toml has no [project] table")
    name, version = _require_identity(table, "pyproject.toml")

    repository = None
    urls = table.get("urls")
    if isinstance(urls, dict):
        by_key = {str(k).lower(): v for k, v in urls.items()}
        for key in _URL_KEYS:
            repository = normalize_repository(by_key.get(key))
            if repository:
                break
    return Project(name=name, version=version, repository=repository)


def project_from_package_json(text: str) -> Project:
    """Build a Project from package.json text.

    Raises:
        ProjectParseError: On invalid JSON or a missing name or version.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectParseError(f"Failed to parse package.json: {e}") from e
    if not isinstance(data, dict):
        raise ProjectParseError("package.json top-level value must be an object")

    name, version = _require_identity(data, "package.json")
    repository = data.get("repository")
    if isinstance(repository, dict):
        repository = repository.get("url")
    return Project(name=name, version=version, repository=normalize_repository(repository))


class ProjectDiscoverer:
    """Discover the project's name, version and repository."""

    def __init__(self, config: ProjectConfig, project_root: Path) -> None:
        self._config = config
        self._project_root = project_root

    def _candidates(self) -> dict[str, Callable[[], Awaitable[Project]]]:
        pyproject = resolve_path(self._project_root, self._config.pyproject_path)
        package_json = resolve_path(self._project_root, self._config.package_json_path)
        return {
            "pyproject": lambda: self._from_file(pyproject, project_from_pyproject),
            "package_json": lambda: self._from_file(package_json, project_from_package_json),
        }

    async def discover(self) -> Project:
        """Return the first manifest that yields a project.

        Raises:
            ProjectError: If no manifest yields a name and version.
        """
        tasks = [
            asyncio.create_task(_attempt(name, factory()), name=f"project-{name}")
            for name, factory in self._candidates().items()
        ]

        reasons: dict[str, str] = {}
        try:
            for next_done in asyncio.as_completed(tasks):
                name, project, error = await next_done
                if project is not None:
                    log.info(
                        "project_discovered",
                        source=name,
                        project=project.name,
                        version=project.version,
                    )
                    return project
                reasons[name] = str(error)
                log.debug("project_source_failed", source=name, reason=str(error))
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        raise ProjectError.not_found(reasons)

    async def _from_file(self, path: Path, build: Callable[[str], Project]) -> Project:
        loop = asyncio.get_running_loop()
        text = await loop.run_in_executor(None, _read_text, path)
        return build(text)


async def _attempt(
    name: str, attempt: Awaitable[Project]
) -> tuple[str, Project | None, ProjectParseError | None]:
    try:
        return name, await attempt, None
    except ProjectParseError as e:
        return name, None, e


def discover_project(project_root: Path, config: ProjectConfig) -> Project:
    """Synchronous entry point for CLI commands."""
    return asyncio.run(ProjectDiscoverer(config, project_root).discover())
