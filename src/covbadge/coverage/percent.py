"""Percentage normalization, formatting and color buckets.

None of these functions raise: invalid input degrades to 0 or "N/A" so a
badge or report is always produced.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from covbadge.config.models import BadgeColorsConfig

_FULL = 100.0
# Smallest value that still renders as 0.1% after rounding
_DISPLAY_FLOOR = 0.05


class ColorBucket(StrEnum):
    """Coverage color buckets, highest first."""

    SUCCESS = "success"
    DARK_SUCCESS = "dark_success"
    YELLOWGREEN = "yellowgreen"
    YELLOW = "yellow"
    ORANGE = "orange"
    DARKRED = "darkred"
    RED = "red"


# Lower bounds (inclusive) for the buckets between 0 and 100 exclusive
_THRESHOLDS: tuple[tuple[float, ColorBucket], ...] = (
    (90.0, ColorBucket.DARK_SUCCESS),
    (80.0, ColorBucket.YELLOWGREEN),
    (70.0, ColorBucket.YELLOW),
    (60.0, ColorBucket.ORANGE),
)


def is_percent(value: Any) -> bool:
    """Return True for a finite, non-negative real number.

    Values above 100 are accepted here; clamping happens in normalize_percent.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value >= 0


def normalize_percent(value: Any) -> float:
    """Clamp to [0, 100]; anything that is not a percent becomes 0."""
    if not is_percent(value):
        return 0.0
    return float(min(value, _FULL))


def format_percent(value: Any) -> str:
    """Format for display: "100%", "0%", one decimal otherwise, "N/A" if invalid."""
    if not is_percent(value):
        return "N/A"
    if value >= _FULL:
        return "100%"
    if value < _DISPLAY_FLOOR:
        return "0%"
    rounded = Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def bucket_for_percent(value: Any) -> ColorBucket:
    """Classify the normalized value into a color bucket."""
    pct = normalize_percent(value)
    if pct >= _FULL:
        return ColorBucket.SUCCESS
    for threshold, bucket in _THRESHOLDS:
        if pct >= threshold:
            return bucket
    if pct > 0:
        return ColorBucket.DARKRED
    return ColorBucket.RED


def color_for_percent(value: Any, colors: BadgeColorsConfig) -> str:
    """Resolve the configured color for the value's bucket."""
    bucket = bucket_for_percent(value)
    return {
        ColorBucket.SUCCESS: colors.complete,
        ColorBucket.DARK_SUCCESS: colors.above_90,
        ColorBucket.YELLOWGREEN: colors.above_80,
        ColorBucket.YELLOW: colors.above_70,
        ColorBucket.ORANGE: colors.above_60,
        ColorBucket.DARKRED: colors.below_60,
        ColorBucket.RED: colors.zero,
    }[bucket]
