"""Aggregate application use cases."""

from .deliveries import check_delivery_auto_release
from .disputes import check_dispute_deadlines
from .monitors import MonitorRunSummary, run_monitors

__all__ = [
    "MonitorRunSummary",
    "check_delivery_auto_release",
    "check_dispute_deadlines",
    "run_monitors",
]
