"""
Reference ranges and scoring thresholds for health metrics.

Every number the scorer and the normal-range check compare against lives
here. Units:
  heart_rate        bpm
  blood_pressure    mmHg (systolic / diastolic)
  sleep             hours per night
  steps             steps per day
  glucose           mg/dL, fasting
  temperature       Celsius
  oxygen_saturation percent

Bands are closed on both ends unless noted; the scorer walks them in order
and uses the first match.
"""

from __future__ import annotations

from dataclasses import dataclass

from healthprevent.tracker.models import MetricType


@dataclass(frozen=True, slots=True)
class NormalRange:
    low: float | None = None
    high: float | None = None

    def contains(self, value: float) -> bool:
        return (self.low is None or value >= self.low) and (self.high is None or value <= self.high)


@dataclass(frozen=True, slots=True)
class ScoreBand:
    """Half-open [low, high) band unless `high_inclusive` is set."""

    modifier: int
    low: float | None = None
    high: float | None = None
    high_inclusive: bool = False

    def contains(self, value: float) -> bool:
        if self.low is not None and not value >= self.low:
            return False
        if self.high is not None:
            return value <= self.high if self.high_inclusive else value < self.high
        return True


# ---------------------------------------------------------------------------
# Normal ranges (per-sample check)
# ---------------------------------------------------------------------------

NORMAL_RANGES: dict[MetricType, NormalRange] = {
    MetricType.heart_rate: NormalRange(low=60.0, high=100.0),
    MetricType.weight: NormalRange(),  # depends on the person
    MetricType.glucose: NormalRange(low=70.0, high=99.0),
    MetricType.temperature: NormalRange(low=36.1, high=37.2),
    MetricType.oxygen_saturation: NormalRange(low=95.0, high=100.0),
}

SYSTOLIC_NORMAL = NormalRange(low=90.0, high=120.0)
DIASTOLIC_NORMAL = NormalRange(low=60.0, high=80.0)


def get_normal_range(metric_type: MetricType) -> NormalRange | None:
    return NORMAL_RANGES.get(metric_type)


# ---------------------------------------------------------------------------
# Health score
# ---------------------------------------------------------------------------

BASE_HEALTH_SCORE = 70
SCORE_MIN = 0
SCORE_MAX = 100

# Heart rate: (-inf, 60) and (100, inf) = -5, [60, 80] = +5, (80, 100] = 0
HEART_RATE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(modifier=-5, high=60.0),
    ScoreBand(modifier=5, low=60.0, high=80.0, high_inclusive=True),
    ScoreBand(modifier=0, low=80.0, high=100.0, high_inclusive=True),
    ScoreBand(modifier=-5, low=100.0),
)

# Blood pressure: share of "optimal" samples (systolic < 120 and diastolic < 80)
BP_OPTIMAL_SYSTOLIC_BELOW = 120.0
BP_OPTIMAL_DIASTOLIC_BELOW = 80.0
BP_OPTIMAL_SHARE_GOOD = 0.8  # strictly above -> +10
BP_OPTIMAL_SHARE_POOR = 0.4  # strictly below -> -10
BP_GOOD_MODIFIER = 10
BP_POOR_MODIFIER = -10

# Sleep hours: [7, 9] = +8, < 6 = -8, [6, 7) = -4, > 9 = 0
SLEEP_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(modifier=8, low=7.0, high=9.0, high_inclusive=True),
    ScoreBand(modifier=-8, high=6.0),
    ScoreBand(modifier=-4, low=6.0, high=7.0),
)

# Steps: >= 10000 = +10, [7500, 10000) = +5, < 5000 = -5, [5000, 7500) = 0
STEPS_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(modifier=10, low=10000.0),
    ScoreBand(modifier=5, low=7500.0, high=10000.0),
    ScoreBand(modifier=-5, high=5000.0),
)


# ---------------------------------------------------------------------------
# Observations
# ---------------------------------------------------------------------------

RESTING_HEART_RATE = NormalRange(low=60.0, high=100.0)
RECOMMENDED_SLEEP_MIN = 7.0
RECOMMENDED_SLEEP_MAX = 9.0
ACTIVE_STEPS_THRESHOLD = 7000.0
RECOMMENDED_STEPS = 10000


# ---------------------------------------------------------------------------
# Concerns
# ---------------------------------------------------------------------------

BP_HIGH_SYSTOLIC_ABOVE = 130.0
BP_HIGH_DIASTOLIC_ABOVE = 80.0
BP_HIGH_SHARE = 0.5  # strictly above

SLEEP_VARIANCE_MIN_SAMPLES = 4
SLEEP_VARIANCE_HOURS = 1.5  # strictly above
SLEEP_VARIANCE_SHARE = 1 / 3  # of consecutive pairs, strictly above

LOW_ACTIVITY_STEPS_BELOW = 5000.0
LOW_ACTIVITY_SHARE = 0.5  # strictly above
