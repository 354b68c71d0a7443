"""Config module exports."""

from covbadge.config.loader import load_config, resolve_path
from covbadge.config.models import (
    BadgeColorsConfig,
    BadgesConfig,
    CovBadgeConfig,
    CoverageConfig,
    LoggingConfig,
    ProjectConfig,
    ReleaseConfig,
)

__all__ = [
    "load_config",
    "resolve_path",
    "BadgeColorsConfig",
    "BadgesConfig",
    "CovBadgeConfig",
    "CoverageConfig",
    "LoggingConfig",
    "ProjectConfig",
    "ReleaseConfig",
]
