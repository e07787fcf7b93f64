"""Tests for health score, observations, concerns and recommendations."""

from __future__ import annotations

from healthprevent.tracker.models import MetricType, ScoreResult
from healthprevent.tracker.scorer import (
    CONCERN_HIGH_BLOOD_PRESSURE,
    CONCERN_IRREGULAR_SLEEP,
    CONCERN_LOW_ACTIVITY,
    GENERIC_RECOMMENDATIONS,
    calculate_health_score,
    generate_observations,
    generate_recommendations,
    identify_concerns,
    score_health,
)
from tests.conftest import samples

HR = MetricType.heart_rate
BP = MetricType.blood_pressure
SLEEP = MetricType.sleep
STEPS = MetricType.steps


def bp(*pairs: tuple[int, int]) -> list:
    return samples(BP, [{"systolic": s, "diastolic": d} for s, d in pairs])


# ---------------------------------------------------------------------------
# Health score
# ---------------------------------------------------------------------------

class TestHealthScore:
    def test_reference_example(self):
        metrics = samples(HR, [65, 75]) + samples(SLEEP, [8, 8]) + samples(STEPS, [11000, 11000])
        assert calculate_health_score(metrics) == 93

    def test_no_metrics_is_base(self):
        assert calculate_health_score([]) == 70

    def test_unscored_types_ignored(self):
        assert calculate_health_score(samples(MetricType.weight, [80, 81])) == 70

    def test_heart_rate_bands(self):
        expected = {59: 65, 60: 75, 80: 75, 80.5: 70, 100: 70, 101: 65}
        for value, score in expected.items():
            assert calculate_health_score(samples(HR, [value])) == score, value

    def test_heart_rate_uses_average(self):
        # 50 and 90 average to 70
        assert calculate_health_score(samples(HR, [50, 90])) == 75

    def test_blood_pressure_mostly_optimal(self):
        metrics = bp((110, 70), (115, 75), (112, 72), (118, 78), (100, 65))
        assert calculate_health_score(metrics) == 80

    def test_blood_pressure_exactly_80_percent_is_neutral(self):
        metrics = bp((110, 70), (115, 75), (112, 72), (118, 78), (125, 85))
        assert calculate_health_score(metrics) == 70

    def test_blood_pressure_exactly_40_percent_is_neutral(self):
        metrics = bp((110, 70), (115, 75), (130, 85), (135, 88), (125, 85))
        assert calculate_health_score(metrics) == 70

    def test_blood_pressure_mostly_high(self):
        metrics = bp((110, 70), (130, 85), (135, 88), (140, 90), (125, 85))
        assert calculate_health_score(metrics) == 60

    def test_optimal_needs_both_components_below(self):
        assert calculate_health_score(bp((119, 80))) == 60

    def test_sleep_bands(self):
        expected = {5: 62, 6: 66, 6.5: 66, 7: 78, 9: 78, 9.5: 70}
        for value, score in expected.items():
            assert calculate_health_score(samples(SLEEP, [value])) == score, value

    def test_steps_bands(self):
        expected = {4999: 65, 5000: 70, 7499: 70, 7500: 75, 9999: 75, 10000: 80}
        for value, score in expected.items():
            assert calculate_health_score(samples(STEPS, [value])) == score, value

    def test_clamped_at_100(self):
        metrics = (
            samples(HR, [70])
            + bp((110, 70))
            + samples(SLEEP, [8])
            + samples(STEPS, [12000])
        )
        assert calculate_health_score(metrics) == 100

    def test_worst_case(self):
        metrics = samples(HR, [120]) + bp((150, 95)) + samples(SLEEP, [4]) + samples(STEPS, [1000])
        assert calculate_health_score(metrics) == 42

    def test_malformed_heart_rate_contributes_nothing(self):
        assert calculate_health_score(samples(HR, ["abc", 70])) == 70

    def test_scalar_blood_pressure_counts_as_not_optimal(self):
        assert calculate_health_score(samples(BP, [115])) == 60

    def test_unparseable_blood_pressure_component_counts_as_not_optimal(self):
        assert calculate_health_score(bp(("high", 80))) == 60

    def test_idempotent(self):
        metrics = samples(HR, [72]) + samples(STEPS, [8000])
        assert calculate_health_score(metrics) == calculate_health_score(metrics)


# ---------------------------------------------------------------------------
# Observations
# ---------------------------------------------------------------------------

class TestObservations:
    def test_empty(self):
        assert generate_observations([]) == []

    def test_heart_rate_within(self):
        assert generate_observations(samples(HR, [70, 74])) == [
            "Your average heart rate (72.0 bpm) is within the normal resting range."
        ]

    def test_heart_rate_below(self):
        assert "below the typical resting range" in generate_observations(samples(HR, [55]))[0]

    def test_heart_rate_above(self):
        assert "above the typical resting range" in generate_observations(samples(HR, [105]))[0]

    def test_sleep_below(self):
        assert generate_observations(samples(SLEEP, [6])) == [
            "Your average sleep duration (6.0 hours) is below the recommended 7-9 hours."
        ]

    def test_sleep_meets(self):
        assert generate_observations(samples(SLEEP, [8])) == [
            "Your average sleep duration (8.0 hours) meets the recommended guidelines."
        ]

    def test_steps_below(self):
        assert generate_observations(samples(STEPS, [6500])) == [
            "Your average daily step count (6500) is below the recommended 10,000 steps."
        ]

    def test_steps_good(self):
        assert generate_observations(samples(STEPS, [8000])) == [
            "You're maintaining a good activity level with an average of 8000 steps daily."
        ]

    def test_steps_average_rounds_half_up(self):
        assert "(6501)" in generate_observations(samples(STEPS, [6500, 6501]))[0]

    def test_fixed_order(self):
        metrics = samples(STEPS, [8000]) + samples(SLEEP, [8]) + samples(HR, [72])
        observations = generate_observations(metrics)
        assert len(observations) == 3
        assert "heart rate" in observations[0]
        assert "sleep" in observations[1]
        assert "steps" in observations[2]

    def test_blood_pressure_only_has_no_observation(self):
        assert generate_observations(bp((120, 80))) == []


# ---------------------------------------------------------------------------
# Concerns
# ---------------------------------------------------------------------------

class TestConcerns:
    def test_empty(self):
        assert identify_concerns([]) == []

    def test_low_activity_over_half(self):
        metrics = samples(STEPS, [3000, 4000, 4500, 9000])
        assert identify_concerns(metrics) == [CONCERN_LOW_ACTIVITY]

    def test_low_activity_exactly_half_not_flagged(self):
        metrics = samples(STEPS, [3000, 4000, 6000, 9000])
        assert identify_concerns(metrics) == []

    def test_high_blood_pressure(self):
        metrics = bp((135, 85), (140, 90), (118, 75))
        assert identify_concerns(metrics) == [CONCERN_HIGH_BLOOD_PRESSURE]

    def test_high_blood_pressure_diastolic_only(self):
        metrics = bp((120, 81), (120, 82), (110, 70))
        assert identify_concerns(metrics) == [CONCERN_HIGH_BLOOD_PRESSURE]

    def test_high_blood_pressure_exactly_half_not_flagged(self):
        assert identify_concerns(bp((131, 70), (120, 70))) == []

    def test_blood_pressure_boundary_not_high(self):
        assert identify_concerns(bp((130, 80), (130, 80))) == []

    def test_irregular_sleep(self):
        assert identify_concerns(samples(SLEEP, [8, 6, 8, 6])) == [CONCERN_IRREGULAR_SLEEP]

    def test_one_third_of_pairs_not_flagged(self):
        assert identify_concerns(samples(SLEEP, [8, 8, 8, 6])) == []

    def test_sleep_needs_four_samples(self):
        assert identify_concerns(samples(SLEEP, [8, 5, 8])) == []

    def test_sleep_difference_of_exactly_one_and_half(self):
        assert identify_concerns(samples(SLEEP, [7, 8.5, 7, 8.5, 7])) == []

    def test_sleep_pairs_follow_input_order(self):
        metrics = samples(SLEEP, [8, 6, 8, 6])
        assert identify_concerns(list(reversed(metrics))) == [CONCERN_IRREGULAR_SLEEP]
        ordered = samples(SLEEP, [6, 6, 8, 8])
        assert identify_concerns(ordered) == []

    def test_fixed_order(self):
        metrics = (
            samples(STEPS, [1000, 1000])
            + samples(SLEEP, [9, 5, 9, 5])
            + bp((150, 95))
        )
        assert identify_concerns(metrics) == [
            CONCERN_HIGH_BLOOD_PRESSURE,
            CONCERN_IRREGULAR_SLEEP,
            CONCERN_LOW_ACTIVITY,
        ]


class TestRecommendations:
    def test_generic_without_concerns(self):
        assert generate_recommendations([]) == list(GENERIC_RECOMMENDATIONS)

    def test_two_per_concern(self):
        recs = generate_recommendations([CONCERN_HIGH_BLOOD_PRESSURE, CONCERN_LOW_ACTIVITY])
        assert len(recs) == 4
        assert "sodium" in recs[0]

    def test_unknown_concern_falls_back_to_generic(self):
        assert generate_recommendations(["Something else"]) == list(GENERIC_RECOMMENDATIONS)


class TestScoreHealth:
    def test_combines_parts(self):
        metrics = samples(HR, [65, 75]) + samples(SLEEP, [8, 8]) + samples(STEPS, [11000, 11000])
        result = score_health(metrics)
        assert isinstance(result, ScoreResult)
        assert result.health_score == 93
        assert len(result.observations) == 3
        assert result.concerns == ()
        assert result.recommendations == GENERIC_RECOMMENDATIONS

    def test_concerns_drive_recommendations(self):
        result = score_health(samples(STEPS, [1000, 2000, 3000]))
        assert result.health_score == 65
        assert result.concerns == (CONCERN_LOW_ACTIVITY,)
        assert len(result.recommendations) == 2

    def test_empty(self):
        result = score_health([])
        assert result.health_score == 70
        assert result.observations == ()
        assert result.concerns == ()

    def test_idempotent(self):
        metrics = samples(HR, [72]) + bp((135, 85)) + samples(STEPS, [4000])
        assert score_health(metrics) == score_health(metrics)

    def test_malformed_values_do_not_raise(self):
        metrics = samples(HR, ["junk"]) + samples(STEPS, ["n/a", 4000])
        result = score_health(metrics)
        assert result.health_score == 70
        assert "NaN" in result.observations[0]

    def test_malformed_blood_pressure_does_not_raise(self):
        result = score_health(bp(("high", 80), (115, 75)))
        assert result.health_score == 70
        assert result.concerns == ()
