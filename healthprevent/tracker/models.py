"""Goal, check-in and metric contracts — Pydantic v2 models.

All models are frozen: a Goal is an immutable snapshot and every mutation
returns a new one (see goal_tracker.record_check_in).
"""

from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator


class Frequency(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    custom = "custom"


class GoalStatus(str, Enum):
    active = "active"
    completed = "completed"
    abandoned = "abandoned"


class GoalCategory(str, Enum):
    fitness = "fitness"
    nutrition = "nutrition"
    mental = "mental"
    sleep = "sleep"
    health = "health"
    custom = "custom"


class MetricType(str, Enum):
    heart_rate = "heart_rate"
    blood_pressure = "blood_pressure"
    weight = "weight"
    glucose = "glucose"
    temperature = "temperature"
    oxygen_saturation = "oxygen_saturation"
    steps = "steps"
    sleep = "sleep"
    calories = "calories"
    water = "water"
    custom = "custom"


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


class BloodPressure(BaseModel):
    model_config = {"frozen": True}

    systolic: float
    diastolic: float

    @field_validator("systolic", "diastolic", mode="before")
    @classmethod
    def _component(cls, v: Any) -> float:
        return _to_float(v)


# A reading is either a plain number or a blood-pressure pair.
Reading = Union[BloodPressure, float]


def _coerce_reading(value: Any) -> Any:
    """Turn unparseable scalars into NaN so validation never rejects a sample."""
    if value is None or isinstance(value, (BloodPressure, dict, float)):
        return value
    return _to_float(value)


class CheckIn(BaseModel):
    model_config = {"frozen": True}

    date: datetime
    completed: bool = False
    value: Reading | None = None
    notes: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _value(cls, v: Any) -> Any:
        return _coerce_reading(v)


class TargetMetric(BaseModel):
    model_config = {"frozen": True}

    current: Reading | None = None
    target: Reading | None = None
    unit: str | None = None

    @field_validator("current", "target", mode="before")
    @classmethod
    def _reading(cls, v: Any) -> Any:
        return _coerce_reading(v)


class Goal(BaseModel):
    """Goal snapshot. `progress` and `streak` are derived from `check_ins`."""

    model_config = {"frozen": True}

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    description: str | None = None
    category: GoalCategory = GoalCategory.custom
    status: GoalStatus = GoalStatus.active
    progress: int = Field(default=0, ge=0, le=100)
    streak: int = Field(default=0, ge=0)
    metrics: TargetMetric = Field(default_factory=TargetMetric)
    frequency: Frequency = Frequency.daily
    start_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    target_date: datetime | None = None
    completed_date: datetime | None = None
    check_ins: tuple[CheckIn, ...] = ()
    ai_recommendations: tuple[str, ...] = ()


class MetricSample(BaseModel):
    model_config = {"frozen": True}

    type: MetricType
    value: Reading
    unit: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    note: str | None = None
    source: str = "manual"

    @field_validator("value", mode="before")
    @classmethod
    def _value(cls, v: Any) -> Any:
        return _coerce_reading(v)


class ScoreResult(BaseModel):
    """Health analysis for one window of samples — never persisted here."""

    model_config = {"frozen": True}

    health_score: int = Field(ge=0, le=100)
    observations: tuple[str, ...] = ()
    concerns: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


class GoalStats(BaseModel):
    active_goals: int = 0
    completed_goals: int = 0
    abandoned_goals: int = 0
    total_goals: int = 0
    completion_rate: float = 0.0  # percent
    category_counts: dict[str, int] = Field(default_factory=dict)
    average_streak: float = 0.0  # active goals only
    longest_streak: int = 0


class MetricSummary(BaseModel):
    """Window statistics for one metric type.

    For blood pressure, average/min/max are BloodPressure pairs.
    """

    metric_type: MetricType
    period: str
    count: int = 0
    average: Reading | None = None
    min: Reading | None = None
    max: Reading | None = None
    latest: MetricSample | None = None
