"""Shared factories for the test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from healthprevent.tracker.models import (
    CheckIn,
    Frequency,
    Goal,
    MetricSample,
    MetricType,
    TargetMetric,
)

BASE_DATE = datetime(2026, 2, 15, 8, 0, tzinfo=timezone.utc)


def make_check_in(
    value: Any = None,
    date: datetime | None = None,
    completed: bool = True,
    notes: str | None = None,
) -> CheckIn:
    """Helper to build a check-in (defaults to a completed one on BASE_DATE)."""
    return CheckIn(date=date or BASE_DATE, completed=completed, value=value, notes=notes)


def daily_check_ins(
    count: int,
    value: Any = 1.0,
    end: datetime = BASE_DATE,
    gap_days: int = 1,
    completed: bool = True,
) -> list[CheckIn]:
    """`count` check-ins ending at `end`, newest first, `gap_days` apart."""
    return [
        make_check_in(value=value, date=end - timedelta(days=i * gap_days), completed=completed)
        for i in range(count)
    ]


def make_goal(
    target: Any = 10000.0,
    frequency: Frequency = Frequency.daily,
    check_ins: list[CheckIn] | None = None,
    **overrides: Any,
) -> Goal:
    defaults: dict[str, Any] = dict(
        title="Walk more",
        metrics=TargetMetric(current=0, target=target, unit="steps"),
        frequency=frequency,
        start_date=BASE_DATE - timedelta(days=10),
        check_ins=tuple(check_ins or ()),
    )
    defaults.update(overrides)
    return Goal(**defaults)


def make_sample(
    metric_type: MetricType | str,
    value: Any,
    ts: datetime | None = None,
    unit: str | None = None,
) -> MetricSample:
    """Helper to build a metric sample."""
    return MetricSample(type=metric_type, value=value, timestamp=ts or BASE_DATE, unit=unit)


def samples(metric_type: MetricType | str, values: list[Any]) -> list[MetricSample]:
    """One sample per value, a day apart, oldest first."""
    start = BASE_DATE - timedelta(days=len(values))
    return [make_sample(metric_type, v, ts=start + timedelta(days=i)) for i, v in enumerate(values)]
