"""Goal progress & streak engine.

calculate_progress and update_streak are pure functions of a check-in
history. The cached `progress` / `streak` fields on a Goal are only written
through record_check_in / recompute, which always call them, so the cache
cannot drift from the history.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Sequence

from healthprevent.config import settings
from healthprevent.tracker import features
from healthprevent.tracker.cadence import expected_gap_days
from healthprevent.tracker.errors import GoalStateError, TargetShapeError
from healthprevent.tracker.models import (
    BloodPressure,
    CheckIn,
    Frequency,
    Goal,
    GoalCategory,
    GoalStats,
    GoalStatus,
    Reading,
)

logger = logging.getLogger(__name__)


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def latest_check_in(check_ins: Sequence[CheckIn]) -> CheckIn | None:
    """Check-in with the greatest date. On ties the earliest recorded wins."""
    if not check_ins:
        return None
    return max(check_ins, key=lambda c: features.as_aware(c.date))


def _percent_of(current: float, target: float) -> float | None:
    """current / target * 100, or None when either side is unusable."""
    if not features.is_number(current) or not features.is_number(target) or target == 0.0:
        return None
    return current / target * 100.0


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def calculate_progress(
    check_ins: Sequence[CheckIn],
    target: Reading | None,
    previous_progress: int = 0,
) -> int:
    """Percent progress (0–100) of the latest check-in toward `target`.

    - no check-ins: 0
    - blood-pressure target: mean of systolic and diastolic percentages
    - numeric target: latest value / target * 100
    Results are rounded half-up and capped at 100. When the latest value or
    the target is missing or not a number, `previous_progress` is returned.

    Raises TargetShapeError when the target and the latest reading are
    different variants.
    """
    latest = latest_check_in(check_ins)
    if latest is None:
        return 0
    if target is None or latest.value is None:
        return previous_progress

    value = latest.value
    if isinstance(value, float) and math.isnan(value):
        logger.warning("Unparseable check-in value for target %r, keeping progress %d", target, previous_progress)
        return previous_progress
    if isinstance(target, BloodPressure):
        if not isinstance(value, BloodPressure):
            raise TargetShapeError(target, value)
        systolic, diastolic = features.bp_components(value)
        target_systolic, target_diastolic = features.bp_components(target)
        systolic_pct = _percent_of(systolic, target_systolic)
        diastolic_pct = _percent_of(diastolic, target_diastolic)
        pct = None if systolic_pct is None or diastolic_pct is None else (systolic_pct + diastolic_pct) / 2
    else:
        if isinstance(value, BloodPressure):
            raise TargetShapeError(target, value)
        pct = _percent_of(features.to_number(value), features.to_number(target))

    if pct is None or not math.isfinite(pct):
        logger.warning("Unparseable check-in value %r for target %r, keeping progress %d", value, target, previous_progress)
        return previous_progress
    return int(features.clamp(features.round_half_up(pct), 0, 100))


# ---------------------------------------------------------------------------
# Streak
# ---------------------------------------------------------------------------

def update_streak(check_ins: Sequence[CheckIn], frequency: Frequency | str) -> int:
    """Consecutive on-schedule completed check-ins ending at the latest one.

    Returns 0 when there are no check-ins or the latest is not completed.
    Walking back from the latest, each check-in extends the streak only if it
    is completed and sits exactly one cadence gap (in days) before the
    previous one. A cadence without a gap (custom) stops at 1.
    """
    if not check_ins:
        return 0

    ordered = sorted(check_ins, key=lambda c: features.as_aware(c.date), reverse=True)
    latest = ordered[0]
    if not latest.completed:
        return 0

    gap = expected_gap_days(frequency)
    streak = 1
    if gap is None:
        return streak

    prev_date = latest.date
    for check_in in ordered[1:]:
        if not check_in.completed or features.day_gap(prev_date, check_in.date) != gap:
            break
        streak += 1
        prev_date = check_in.date
    return streak


# ---------------------------------------------------------------------------
# Snapshot transitions
# ---------------------------------------------------------------------------

def recompute(goal: Goal) -> Goal:
    """Return `goal` with progress and streak recomputed from its check-ins."""
    progress = calculate_progress(goal.check_ins, goal.metrics.target, goal.progress)
    streak = update_streak(goal.check_ins, goal.frequency)
    logger.debug("Goal %s recomputed: progress=%d streak=%d", goal.id, progress, streak)
    return goal.model_copy(update={"progress": progress, "streak": streak})


def record_check_in(goal: Goal, check_in: CheckIn, now: datetime | None = None) -> Goal:
    """Append a check-in and return the updated goal snapshot.

    An active goal becomes completed when progress reaches 100 and the new
    check-in is marked completed. Closed goals keep their status.
    """
    updated = recompute(goal.model_copy(update={"check_ins": (*goal.check_ins, check_in)}))

    if goal.status is GoalStatus.active and updated.progress >= 100 and check_in.completed:
        logger.info("Goal %s completed", goal.id)
        updated = updated.model_copy(
            update={"status": GoalStatus.completed, "completed_date": _now(now)}
        )
    return updated


def abandon_goal(goal: Goal) -> Goal:
    """Caller-driven active -> abandoned transition."""
    if goal.status is not GoalStatus.active:
        raise GoalStateError(f"Cannot abandon goal {goal.id} with status '{goal.status.value}'")
    logger.info("Goal %s abandoned", goal.id)
    return goal.model_copy(update={"status": GoalStatus.abandoned})


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

def days_remaining(goal: Goal, now: datetime | None = None) -> int | None:
    """Whole days (rounded up) until target_date. 0 once completed or overdue."""
    if goal.target_date is None:
        return None
    if goal.status is GoalStatus.completed:
        return 0
    return max(features.ceil_days(goal.target_date, _now(now)), 0)


def days_since_start(goal: Goal, now: datetime | None = None) -> int:
    return max(features.ceil_days(_now(now), goal.start_date), 0)


def goal_stats(goals: Iterable[Goal]) -> GoalStats:
    """Status counts, completion rate and streak figures for a set of goals.

    Streak figures only consider active goals.
    """
    goals = list(goals)
    statuses = Counter(g.status for g in goals)
    categories = Counter(g.category for g in goals)

    active = statuses[GoalStatus.active]
    completed = statuses[GoalStatus.completed]
    abandoned = statuses[GoalStatus.abandoned]
    total = active + completed + abandoned

    active_streaks = [g.streak for g in goals if g.status is GoalStatus.active]
    avg_streak = features.average([float(s) for s in active_streaks]) or 0.0

    return GoalStats(
        active_goals=active,
        completed_goals=completed,
        abandoned_goals=abandoned,
        total_goals=total,
        completion_rate=round(features.share(completed, total) * 100.0, settings.goal_stats_precision),
        category_counts={c.value: categories[c] for c in GoalCategory},
        average_streak=round(avg_streak, settings.goal_streak_precision),
        longest_streak=max(active_streaks, default=0),
    )
