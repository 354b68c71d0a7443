"""covbadge error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Coverage
- 4xxx: Badge
- 5xxx: Project
- 6xxx: Release
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Coverage (3xxx)
    COVERAGE_NOT_FOUND = 3001
    COVERAGE_GATE_FAILED = 3002

    # Badge (4xxx)
    BADGE_TEMPLATE_MISSING = 4001
    BADGE_WRITE_FAILED = 4002

    # Project (5xxx)
    PROJECT_NOT_FOUND = 5001

    # Release (6xxx)
    RELEASE_WRITE_FAILED = 6001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CovBadgeError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'COVERAGE_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovBadgeError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class CoverageError(CovBadgeError):
    """Coverage discovery and gate errors."""

    @classmethod
    def not_found(cls, reasons: dict[str, str]) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_NOT_FOUND,
            message="Unable to discover code coverage from any source",
            details={"sources": dict(reasons)},
        )

    @classmethod
    def gate_failed(cls, actual: str, required: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_GATE_FAILED,
            message=f"Code coverage gate failed: {actual} < {required}",
            details={"actual": actual, "required": required},
        )


class BadgeError(CovBadgeError):
    """Badge templating and output errors."""

    @classmethod
    def template_missing(cls, path: str) -> "BadgeError":
        return cls(
            code=ErrorCode.BADGE_TEMPLATE_MISSING,
            message=f"Badge template not found: {path}",
            details={"path": path},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "BadgeError":
        return cls(
            code=ErrorCode.BADGE_WRITE_FAILED,
            message=f"Failed to write badge to {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )


class ProjectError(CovBadgeError):
    """Project metadata discovery errors."""

    @classmethod
    def not_found(cls, reasons: dict[str, str]) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_NOT_FOUND,
            message="Unable to discover project using available methods",
            details={"sources": dict(reasons)},
        )


class ReleaseError(CovBadgeError):
    """Version module and release notes output errors."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "ReleaseError":
        return cls(
            code=ErrorCode.RELEASE_WRITE_FAILED,
            message=f"Failed to write {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )


class InternalError(CovBadgeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
