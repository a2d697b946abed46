"""Match scheduling and conflict detection."""

from bracketeer.scheduling.conflicts import detect_conflicts
from bracketeer.scheduling.engine import (
    SchedulingEngine,
    schedule,
    schedule_with_constraints,
)

__all__ = [
    "SchedulingEngine",
    "detect_conflicts",
    "schedule",
    "schedule_with_constraints",
]
