"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVBADGE__SECTION__KEY)
3. Project YAML (.covbadge/config.yaml)
4. Global YAML (~/.config/covbadge/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVBADGE__<SECTION>__<KEY>=<VALUE>

Examples:
    COVBADGE__LOGGING__LEVEL=DEBUG
    COVBADGE__COVERAGE__PERCENT=87.5
    COVBADGE__COVERAGE__REQUIRED=80
    COVBADGE__BADGES__COLORS__ZERO=red
"""

import math
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVBADGE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. User-facing output does not depend on it.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CoverageConfig(BaseModel):
    """Coverage input locations, override and gate.

    Relative paths resolve against the project folder, then ``folder``.

    Env vars:
        COVBADGE__COVERAGE__FOLDER: Folder holding coverage artifacts
        COVBADGE__COVERAGE__PERCENT: Use this percentage instead of reading files
        COVBADGE__COVERAGE__REQUIRED: Minimum coverage for coverage-gate
    """

    folder: str = Field(
        default="coverage",
        description="Folder holding coverage artifacts, relative to the project folder.",
    )
    lcov_info_path: str = Field(
        default="lcov.info",
        description="LCOV record file, relative to the coverage folder.",
    )
    summary_path: str = Field(
        default="coverage-summary.json",
        description="Coverage summary JSON (total.lines.pct), relative to the coverage folder.",
    )
    report_folder: str = Field(
        default="lcov-report",
        description="HTML report folder, relative to the coverage folder. "
        "coverage-report writes here; discovery also scrapes its index.",
    )
    report_index_path: str = Field(
        default="index.html",
        description="HTML index file name inside the report folder.",
    )
    percent: float | None = Field(
        default=None,
        description="Explicit coverage percentage. When set it wins discovery immediately.",
    )
    required: float = Field(
        default=0.0,
        description="Coverage gate in percent. 0 disables the gate.",
    )

    @field_validator("required")
    @classmethod
    def validate_required(cls, v: float) -> float:
        if not math.isfinite(v) or not (0.0 <= v <= 100.0):
            raise ValueError(f"Required coverage must be 0-100, got {v}")
        return v


class BadgeColorsConfig(BaseModel):
    """Badge colors per coverage bucket.

    Bucket boundaries are fixed; only the colors are configurable.

    Env vars:
        COVBADGE__BADGES__COLORS__COMPLETE: Color at exactly 100%
        COVBADGE__BADGES__COLORS__ABOVE_90: Color at 90% and above
        ...
        COVBADGE__BADGES__COLORS__ZERO: Color at exactly 0%
    """

    complete: str = Field(default="#4bc124", description="100%.")
    above_90: str = Field(default="#377526", description="90% up to 100%.")
    above_80: str = Field(default="yellowgreen", description="80% up to 90%.")
    above_70: str = Field(default="yellow", description="70% up to 80%.")
    above_60: str = Field(default="orange", description="60% up to 70%.")
    below_60: str = Field(default="darkred", description="Above 0% and below 60%.")
    zero: str = Field(default="#ff0000", description="0%.")


class BadgesConfig(BaseModel):
    """Badge output configuration.

    Env vars:
        COVBADGE__BADGES__FOLDER: Output folder for badges
        COVBADGE__BADGES__TEMPLATE_PATH: Custom SVG template
    """

    folder: str = Field(
        default=".",
        description="Output folder for generated badges, relative to the project folder.",
    )
    template_path: str | None = Field(
        default=None,
        description="SVG template with {{LABEL}}, {{VALUE}}, {{COLOR}} placeholders. "
        "None uses the packaged template.",
    )
    coverage_badge_path: str = Field(
        default="coverage-summary.svg",
        description="Coverage badge file name, relative to the badges folder.",
    )
    version_badge_path: str = Field(
        default="version-badge.svg",
        description="Version badge file name, relative to the badges folder.",
    )
    colors: BadgeColorsConfig = Field(default_factory=BadgeColorsConfig)


class ProjectConfig(BaseModel):
    """Project metadata sources.

    Env vars:
        COVBADGE__PROJECT__PYPROJECT_PATH: pyproject.toml location
        COVBADGE__PROJECT__PACKAGE_JSON_PATH: package.json location
    """

    pyproject_path: str = Field(default="pyproject.toml")
    package_json_path: str = Field(default="package.json")


class ReleaseConfig(BaseModel):
    """apply-version outputs.

    Relative paths resolve against the project folder.

    Env vars:
        COVBADGE__RELEASE__VERSION_MODULE_PATH: Generated version module
        COVBADGE__RELEASE__NOTES_FOLDER: Folder for release-notes-v<version>.md
        COVBADGE__RELEASE__NOTES_TEMPLATE_PATH: Release notes template
    """

    version_module_path: str = Field(
        default="_version.py",
        description="Python module holding NAME and VERSION, rewritten on every run.",
    )
    notes_folder: str = Field(default="notes")
    notes_template_path: str = Field(
        default="release-notes-template.md",
        description="Markdown template with {{NAME}}, {{VERSION}}, {{REPOSITORY}} placeholders.",
    )


class CovBadgeConfig(BaseModel):
    """Root configuration for covbadge.

    All settings can be configured via:
    1. Environment variables: COVBADGE__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    badges: BadgesConfig = Field(default_factory=BadgesConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
