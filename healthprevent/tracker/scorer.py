"""Health-signal scoring — deterministic heuristics over a window of samples.

Every threshold comes from reference_ranges. Nothing here raises on bad
data: a malformed reading is NaN, NaN averages match no band, and the
affected category simply contributes nothing.
"""

from __future__ import annotations

import logging
from typing import Sequence

from healthprevent.tracker import features
from healthprevent.tracker import reference_ranges as rr
from healthprevent.tracker.models import MetricSample, MetricType, ScoreResult

logger = logging.getLogger(__name__)

CONCERN_HIGH_BLOOD_PRESSURE = "Several blood pressure readings are above the recommended range."
CONCERN_IRREGULAR_SLEEP = (
    "Your sleep duration varies significantly from day to day, which can impact sleep quality."
)
CONCERN_LOW_ACTIVITY = "Several days show lower-than-recommended physical activity levels."

RECOMMENDATIONS_BY_CONCERN: dict[str, tuple[str, ...]] = {
    CONCERN_HIGH_BLOOD_PRESSURE: (
        "Consider reducing sodium intake and increasing potassium-rich foods in your diet.",
        "Try to incorporate 30 minutes of moderate exercise most days of the week.",
    ),
    CONCERN_IRREGULAR_SLEEP: (
        "Establish a consistent sleep schedule, even on weekends.",
        "Create a relaxing bedtime routine to signal your body it's time to sleep.",
    ),
    CONCERN_LOW_ACTIVITY: (
        "Look for opportunities to add movement throughout your day, like taking the stairs or walking meetings.",
        "Schedule dedicated activity time on your calendar to ensure it happens.",
    ),
}

GENERIC_RECOMMENDATIONS: tuple[str, ...] = (
    "Continue monitoring your health metrics to establish solid baselines.",
    "Consider tracking your nutrition to gain insights into dietary patterns.",
    "Add brief meditation sessions to your routine to support mental wellbeing.",
)


def _of_type(metrics: Sequence[MetricSample], metric_type: MetricType) -> list[MetricSample]:
    return [m for m in metrics if m.type == metric_type]


def _numbers(samples: list[MetricSample]) -> list[float]:
    return [features.to_number(m.value) for m in samples]


def _band_modifier(value: float, bands: tuple[rr.ScoreBand, ...]) -> int:
    for band in bands:
        if band.contains(value):
            return band.modifier
    return 0


# ---------------------------------------------------------------------------
# Score
# ---------------------------------------------------------------------------

def _heart_rate_modifier(samples: list[MetricSample]) -> int:
    avg = features.average(_numbers(samples))
    return 0 if avg is None else _band_modifier(avg, rr.HEART_RATE_BANDS)


def _blood_pressure_modifier(samples: list[MetricSample]) -> int:
    if not samples:
        return 0
    optimal = 0
    for sample in samples:
        systolic, diastolic = features.bp_components(sample.value)
        if systolic < rr.BP_OPTIMAL_SYSTOLIC_BELOW and diastolic < rr.BP_OPTIMAL_DIASTOLIC_BELOW:
            optimal += 1
    fraction = features.share(optimal, len(samples))
    if fraction > rr.BP_OPTIMAL_SHARE_GOOD:
        return rr.BP_GOOD_MODIFIER
    if fraction < rr.BP_OPTIMAL_SHARE_POOR:
        return rr.BP_POOR_MODIFIER
    return 0


def _sleep_modifier(samples: list[MetricSample]) -> int:
    avg = features.average(_numbers(samples))
    return 0 if avg is None else _band_modifier(avg, rr.SLEEP_BANDS)


def _steps_modifier(samples: list[MetricSample]) -> int:
    avg = features.average(_numbers(samples))
    return 0 if avg is None else _band_modifier(avg, rr.STEPS_BANDS)


def calculate_health_score(metrics: Sequence[MetricSample]) -> int:
    """Base score plus per-category modifiers, clamped to 0–100."""
    modifiers = (
        _heart_rate_modifier(_of_type(metrics, MetricType.heart_rate))
        + _blood_pressure_modifier(_of_type(metrics, MetricType.blood_pressure))
        + _sleep_modifier(_of_type(metrics, MetricType.sleep))
        + _steps_modifier(_of_type(metrics, MetricType.steps))
    )
    score = features.clamp(rr.BASE_HEALTH_SCORE + modifiers, rr.SCORE_MIN, rr.SCORE_MAX)
    return features.round_half_up(score)


# ---------------------------------------------------------------------------
# Observations
# ---------------------------------------------------------------------------

def generate_observations(metrics: Sequence[MetricSample]) -> list[str]:
    """One sentence per present type: heart rate, sleep, steps (in that order)."""
    observations: list[str] = []

    hr_avg = features.average(_numbers(_of_type(metrics, MetricType.heart_rate)))
    if hr_avg is not None:
        shown = features.format_one_decimal(hr_avg)
        if hr_avg < rr.RESTING_HEART_RATE.low:
            observations.append(f"Your average heart rate ({shown} bpm) is below the typical resting range.")
        elif hr_avg > rr.RESTING_HEART_RATE.high:
            observations.append(f"Your average heart rate ({shown} bpm) is above the typical resting range.")
        else:
            observations.append(f"Your average heart rate ({shown} bpm) is within the normal resting range.")

    sleep_avg = features.average(_numbers(_of_type(metrics, MetricType.sleep)))
    if sleep_avg is not None:
        shown = features.format_one_decimal(sleep_avg)
        recommended = f"{rr.RECOMMENDED_SLEEP_MIN:g}-{rr.RECOMMENDED_SLEEP_MAX:g}"
        if sleep_avg < rr.RECOMMENDED_SLEEP_MIN:
            observations.append(
                f"Your average sleep duration ({shown} hours) is below the recommended {recommended} hours."
            )
        else:
            observations.append(f"Your average sleep duration ({shown} hours) meets the recommended guidelines.")

    steps_avg = features.average(_numbers(_of_type(metrics, MetricType.steps)))
    if steps_avg is not None:
        shown = features.format_whole(steps_avg)
        if steps_avg < rr.ACTIVE_STEPS_THRESHOLD:
            observations.append(
                f"Your average daily step count ({shown}) is below the recommended {rr.RECOMMENDED_STEPS:,} steps."
            )
        else:
            observations.append(
                f"You're maintaining a good activity level with an average of {shown} steps daily."
            )

    return observations


# ---------------------------------------------------------------------------
# Concerns & recommendations
# ---------------------------------------------------------------------------

def _high_blood_pressure(samples: list[MetricSample]) -> bool:
    if not samples:
        return False
    high = 0
    for sample in samples:
        systolic, diastolic = features.bp_components(sample.value)
        if systolic > rr.BP_HIGH_SYSTOLIC_ABOVE or diastolic > rr.BP_HIGH_DIASTOLIC_ABOVE:
            high += 1
    return features.share(high, len(samples)) > rr.BP_HIGH_SHARE


def _irregular_sleep(samples: list[MetricSample]) -> bool:
    # Pairs follow input order, not timestamps.
    if len(samples) < rr.SLEEP_VARIANCE_MIN_SAMPLES:
        return False
    hours = _numbers(samples)
    pairs = list(zip(hours, hours[1:]))
    uneven = sum(1 for prev, cur in pairs if abs(cur - prev) > rr.SLEEP_VARIANCE_HOURS)
    return features.share(uneven, len(pairs)) > rr.SLEEP_VARIANCE_SHARE


def _low_activity(samples: list[MetricSample]) -> bool:
    if not samples:
        return False
    low = sum(1 for steps in _numbers(samples) if steps < rr.LOW_ACTIVITY_STEPS_BELOW)
    return features.share(low, len(samples)) > rr.LOW_ACTIVITY_SHARE


def identify_concerns(metrics: Sequence[MetricSample]) -> list[str]:
    """Independent flags in fixed order: blood pressure, sleep variance, activity."""
    concerns: list[str] = []
    if _high_blood_pressure(_of_type(metrics, MetricType.blood_pressure)):
        concerns.append(CONCERN_HIGH_BLOOD_PRESSURE)
    if _irregular_sleep(_of_type(metrics, MetricType.sleep)):
        concerns.append(CONCERN_IRREGULAR_SLEEP)
    if _low_activity(_of_type(metrics, MetricType.steps)):
        concerns.append(CONCERN_LOW_ACTIVITY)
    return concerns


def generate_recommendations(concerns: Sequence[str]) -> list[str]:
    recommendations: list[str] = []
    for concern in concerns:
        recommendations.extend(RECOMMENDATIONS_BY_CONCERN.get(concern, ()))
    if not recommendations:
        recommendations.extend(GENERIC_RECOMMENDATIONS)
    return recommendations


def score_health(metrics: Sequence[MetricSample]) -> ScoreResult:
    """Full analysis of one window of samples."""
    concerns = identify_concerns(metrics)
    result = ScoreResult(
        health_score=calculate_health_score(metrics),
        observations=generate_observations(metrics),
        concerns=concerns,
        recommendations=generate_recommendations(concerns),
    )
    logger.debug(
        "Scored %d samples: score=%d concerns=%d", len(metrics), result.health_score, len(result.concerns)
    )
    return result
