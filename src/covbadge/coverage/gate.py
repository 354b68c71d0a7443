"""Minimum-coverage gate."""

from __future__ import annotations

from typing import Any

from covbadge.core.errors import ConfigError, CoverageError
from covbadge.core.logging import get_logger
from covbadge.coverage.percent import format_percent, is_percent, normalize_percent

log = get_logger("coverage.gate")


def resolve_required(cli_value: Any, config_value: float) -> float:
    """Pick the required percentage: CLI value when given, else config.

    Raises:
        ConfigError: If the CLI value is not a finite non-negative number.
    """
    if cli_value is None:
        return normalize_percent(config_value)
    if not is_percent(cli_value):
        raise ConfigError.invalid_value(
            "required_coverage", cli_value, "must be a non-negative number"
        )
    return normalize_percent(cli_value)


def check_gate(percentage: float, required: float) -> None:
    """Fail when coverage is below the required percentage.

    A required value of 0 (or less) disables the gate.

    Raises:
        CoverageError: If ``percentage`` is below ``required``.
    """
    if required <= 0:
        log.debug("coverage_gate_disabled")
        return
    actual = normalize_percent(percentage)
    if actual < required:
        log.info("coverage_gate_failed", actual=actual, required=required)
        raise CoverageError.gate_failed(format_percent(actual), format_percent(required))
    log.info("coverage_gate_passed", actual=actual, required=required)
