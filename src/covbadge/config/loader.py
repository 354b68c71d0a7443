"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (COVBADGE__SECTION__KEY)
3. Project config (.covbadge/config.yaml)
4. Global config (~/.config/covbadge/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from covbadge.config.models import (
    BadgesConfig,
    CovBadgeConfig,
    CoverageConfig,
    LoggingConfig,
    ProjectConfig,
    ReleaseConfig,
)
from covbadge.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/covbadge/config.yaml").expanduser()
PROJECT_CONFIG_DIR = ".covbadge"
PROJECT_CONFIG_NAME = "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Lowest-priority source serving the merged YAML documents."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


class _SettingsBase(BaseSettings):
    """Env vars: COVBADGE__COVERAGE__PERCENT, COVBADGE__BADGES__FOLDER, etc."""

    model_config = SettingsConfigDict(
        env_prefix="COVBADGE__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    coverage: CoverageConfig = CoverageConfig()
    badges: BadgesConfig = BadgesConfig()
    project: ProjectConfig = ProjectConfig()
    release: ReleaseConfig = ReleaseConfig()


def _settings_with_yaml(data: dict[str, Any]) -> type[_SettingsBase]:
    """Bind YAML data to a fresh settings subclass so loads never share state."""

    class _Settings(_SettingsBase):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _YamlSource(settings_cls, data))

    return _Settings


def load_config(project_root: Path | None = None, **kwargs: Any) -> CovBadgeConfig:
    """Resolve the configuration for one project folder.

    Sources, lowest first: defaults, ``~/.config/covbadge/config.yaml``,
    ``<project>/.covbadge/config.yaml``, ``COVBADGE__*`` environment
    variables, then ``kwargs`` keyed by section.

    Raises:
        ConfigError: Unreadable YAML or a value that fails validation.
    """
    root = project_root or Path.cwd()
    data = _deep_merge(
        _load_yaml(GLOBAL_CONFIG_PATH),
        _load_yaml(root / PROJECT_CONFIG_DIR / PROJECT_CONFIG_NAME),
    )

    try:
        settings = _settings_with_yaml(data)(**kwargs)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(location, first.get("input"), first["msg"]) from e
    return CovBadgeConfig.model_validate(settings.model_dump())


def resolve_path(base: Path, *parts: str) -> Path:
    """Join parts onto base; an absolute part restarts the path."""
    result = base
    for part in parts:
        result = result / Path(part).expanduser()
    return result.resolve()
