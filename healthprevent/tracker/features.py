"""Pure stateless helpers — math only, no I/O."""

from __future__ import annotations

import math
from datetime import datetime
from zoneinfo import ZoneInfo

from healthprevent.config import settings
from healthprevent.tracker.models import BloodPressure

SECONDS_PER_DAY = 86400.0


def to_number(value: object) -> float:
    """Float value of a scalar reading. NaN for None, blood pressure or junk."""
    if value is None or isinstance(value, (bool, BloodPressure)):
        return math.nan
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return math.nan


def bp_components(value: object) -> tuple[float, float]:
    """(systolic, diastolic) of a reading; NaN pair if it is not blood pressure."""
    if isinstance(value, BloodPressure):
        return to_number(value.systolic), to_number(value.diastolic)
    return math.nan, math.nan


def is_number(value: float) -> bool:
    return not math.isnan(value)


def average(values: list[float]) -> float | None:
    """Arithmetic mean. None if empty; NaN if any value is NaN."""
    if not values:
        return None
    return sum(values) / len(values)


def lowest(values: list[float]) -> float | None:
    """Smallest value. None if empty; NaN if any value is NaN."""
    if not values:
        return None
    if any(math.isnan(v) for v in values):
        return math.nan
    return min(values)


def highest(values: list[float]) -> float | None:
    """Largest value. None if empty; NaN if any value is NaN."""
    if not values:
        return None
    if any(math.isnan(v) for v in values):
        return math.nan
    return max(values)


def share(matches: int, total: int) -> float:
    """Fraction of matching items. 0.0 for an empty population."""
    if total <= 0:
        return 0.0
    return matches / total


def round_half_up(value: float) -> int:
    """Round .5 toward +inf (2.5 -> 3, -2.5 -> -2). `value` must be finite."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def as_aware(dt: datetime, tz_name: str | None = None) -> datetime:
    """Attach the configured timezone to naive datetimes."""
    if dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=ZoneInfo(tz_name or settings.default_tz))


def day_gap(later: datetime, earlier: datetime) -> int:
    """Whole days between two instants, rounded half-up."""
    seconds = (as_aware(later) - as_aware(earlier)).total_seconds()
    return round_half_up(seconds / SECONDS_PER_DAY)


def ceil_days(later: datetime, earlier: datetime) -> int:
    """Days between two instants, rounded up."""
    seconds = (as_aware(later) - as_aware(earlier)).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)


def format_one_decimal(value: float) -> str:
    return "NaN" if math.isnan(value) else f"{value:.1f}"


def format_whole(value: float) -> str:
    return "NaN" if math.isnan(value) else str(round_half_up(value))
