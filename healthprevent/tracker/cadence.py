"""Static cadence configuration — config only.

Each CadenceDefinition ties a goal frequency to the day gap expected between
two consecutive check-ins of a streak. A cadence with no gap cannot chain
check-ins, so its streak never exceeds 1.
"""

from __future__ import annotations

from dataclasses import dataclass

from healthprevent.tracker.models import Frequency


@dataclass(frozen=True, slots=True)
class CadenceDefinition:
    frequency: Frequency
    gap_days: int | None  # None = no defined gap
    label: str = ""


CADENCES: dict[Frequency, CadenceDefinition] = {
    Frequency.daily: CadenceDefinition(frequency=Frequency.daily, gap_days=1, label="Every day"),
    Frequency.weekly: CadenceDefinition(frequency=Frequency.weekly, gap_days=7, label="Every week"),
    Frequency.monthly: CadenceDefinition(frequency=Frequency.monthly, gap_days=30, label="Every 30 days"),
    Frequency.custom: CadenceDefinition(frequency=Frequency.custom, gap_days=None, label="Custom schedule"),
}


def get_cadence(frequency: Frequency | str) -> CadenceDefinition:
    return CADENCES[Frequency(frequency)]


def expected_gap_days(frequency: Frequency | str) -> int | None:
    return get_cadence(frequency).gap_days


def list_cadences() -> list[CadenceDefinition]:
    return list(CADENCES.values())
