"""Per-sample checks and window summaries for health metrics."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

from healthprevent.config import settings
from healthprevent.tracker import features
from healthprevent.tracker import reference_ranges as rr
from healthprevent.tracker.models import BloodPressure, MetricSample, MetricSummary, MetricType

PERIOD_DAYS: dict[str, int] = {"day": 1, "week": 7, "month": 30, "year": 365}


def period_days(period: str | None = None) -> int:
    """Length of a named period. Unknown names fall back to a month."""
    return PERIOD_DAYS.get(period or settings.metrics_default_period, PERIOD_DAYS["month"])


def window_start(period: str | None = None, now: datetime | None = None) -> datetime:
    end = now if now is not None else datetime.now(timezone.utc)
    return end - timedelta(days=period_days(period))


def filter_window(
    samples: Iterable[MetricSample],
    start: datetime,
    end: datetime,
) -> list[MetricSample]:
    """Samples with start <= timestamp <= end, oldest first."""
    lo, hi = features.as_aware(start), features.as_aware(end)
    inside = [s for s in samples if lo <= features.as_aware(s.timestamp) <= hi]
    return sorted(inside, key=lambda s: features.as_aware(s.timestamp))


def is_within_normal_range(sample: MetricSample) -> bool | None:
    """Whether a single reading is inside its normal range; None if the type has none."""
    if sample.type == MetricType.blood_pressure:
        systolic, diastolic = features.bp_components(sample.value)
        return rr.SYSTOLIC_NORMAL.contains(systolic) and rr.DIASTOLIC_NORMAL.contains(diastolic)
    normal = rr.get_normal_range(sample.type)
    if normal is None:
        return None
    return normal.contains(features.to_number(sample.value))


def _plain(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def format_value(sample: MetricSample) -> str:
    if isinstance(sample.value, BloodPressure):
        text = f"{_plain(sample.value.systolic)}/{_plain(sample.value.diastolic)}"
    else:
        text = _plain(sample.value)
    return f"{text} {sample.unit}" if sample.unit else text


def _whole(value: float) -> float:
    return value if math.isnan(value) else features.round_half_up(value)


def _summarize_blood_pressure(samples: Sequence[MetricSample]) -> dict:
    pairs = [features.bp_components(s.value) for s in samples]
    systolic = [p[0] for p in pairs]
    diastolic = [p[1] for p in pairs]
    return {
        "average": BloodPressure(
            systolic=_whole(features.average(systolic)),
            diastolic=_whole(features.average(diastolic)),
        ),
        "min": BloodPressure(systolic=features.lowest(systolic), diastolic=features.lowest(diastolic)),
        "max": BloodPressure(systolic=features.highest(systolic), diastolic=features.highest(diastolic)),
    }


def _summarize_numbers(samples: Sequence[MetricSample]) -> dict:
    values = [features.to_number(s.value) for s in samples]
    return {
        "average": round(features.average(values), 2),
        "min": features.lowest(values),
        "max": features.highest(values),
    }


def summarize_metrics(
    samples: Iterable[MetricSample],
    metric_type: MetricType | str,
    period: str | None = None,
    now: datetime | None = None,
) -> MetricSummary:
    """Count, average, min, max and latest sample of one type over a period.

    Blood-pressure averages are rounded per component; other averages keep
    two decimals. An empty window yields count 0 and None statistics.
    """
    metric_type = MetricType(metric_type)
    period = period or settings.metrics_default_period
    end = now if now is not None else datetime.now(timezone.utc)
    in_window = [
        s for s in filter_window(samples, window_start(period, end), end) if s.type == metric_type
    ]
    if not in_window:
        return MetricSummary(metric_type=metric_type, period=period)

    if metric_type == MetricType.blood_pressure:
        stats = _summarize_blood_pressure(in_window)
    else:
        stats = _summarize_numbers(in_window)
    return MetricSummary(
        metric_type=metric_type,
        period=period,
        count=len(in_window),
        latest=in_window[-1],
        **stats,
    )
