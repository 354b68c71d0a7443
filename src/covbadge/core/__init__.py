"""Core module exports."""

from covbadge.core.errors import (
    BadgeError,
    ConfigError,
    CovBadgeError,
    CoverageError,
    ErrorCode,
    InternalError,
    ProjectError,
    ReleaseError,
)
from covbadge.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from covbadge.core.progress import spinner, status

__all__ = [
    # Errors
    "BadgeError",
    "ConfigError",
    "CovBadgeError",
    "CoverageError",
    "ErrorCode",
    "InternalError",
    "ProjectError",
    "ReleaseError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "spinner",
    "status",
]
