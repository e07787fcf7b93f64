"""Tracker exceptions.

Scoring never raises: malformed numbers flow through as NaN. These errors
cover caller mistakes the tracker can detect up front.
"""

from __future__ import annotations


class TrackerError(ValueError):
    """Base class for tracker input errors."""


class TargetShapeError(TrackerError):
    """Goal target and check-in reading are different variants.

    A blood-pressure target needs a blood-pressure reading, a numeric target
    needs a numeric reading.
    """

    def __init__(self, target: object, value: object):
        self.target = target
        self.value = value
        super().__init__(
            f"Target {type(target).__name__} cannot be compared with reading {type(value).__name__}"
        )


class GoalStateError(TrackerError):
    """Requested status transition is not allowed from the goal's current status."""
