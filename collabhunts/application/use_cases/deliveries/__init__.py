"""Use cases for bookings whose deliverables await the brand's review."""

from .auto_release import (
    REVIEW_WINDOW_HOURS,
    DeliveryAction,
    DeliveryRunSummary,
    check_delivery_auto_release,
    plan_delivery_action,
)

__all__ = [
    "DeliveryAction",
    "DeliveryRunSummary",
    "REVIEW_WINDOW_HOURS",
    "check_delivery_auto_release",
    "plan_delivery_action",
]
