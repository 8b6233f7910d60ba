"""Use cases for disputes awaiting a response or an admin decision."""

from .deadlines import (
    DAY_TWO_REMINDER_HOURS,
    FINAL_REMINDER_HOURS,
    RESOLUTION_WINDOW,
    DisputeRunSummary,
    check_dispute_deadlines,
)

__all__ = [
    "DAY_TWO_REMINDER_HOURS",
    "DisputeRunSummary",
    "FINAL_REMINDER_HOURS",
    "RESOLUTION_WINDOW",
    "check_dispute_deadlines",
]
