"""Domain entities exposed by the application."""

from .booking import (
    Booking,
    BookingParties,
    BookingStatus,
    DeliveredBooking,
    DeliveryStatus,
    PaymentStatus,
    ReviewReminderStage,
)
from .dispute import (
    ACTIVE_DISPUTE_STATUSES,
    DISPUTE_ADMIN_LINK,
    RESOLVED_DISPUTE_STATUSES,
    ActiveDispute,
    Dispute,
    DisputeStatus,
    PartyRole,
)
from .errors import InvalidRecordError
from .notification import (
    NOTIFICATION_TYPE_BOOKING,
    NOTIFICATION_TYPE_DISPUTE,
    Notification,
    NotificationDraft,
)

__all__ = [
    "ACTIVE_DISPUTE_STATUSES",
    "ActiveDispute",
    "Booking",
    "BookingParties",
    "BookingStatus",
    "DISPUTE_ADMIN_LINK",
    "DeliveredBooking",
    "DeliveryStatus",
    "Dispute",
    "DisputeStatus",
    "InvalidRecordError",
    "NOTIFICATION_TYPE_BOOKING",
    "NOTIFICATION_TYPE_DISPUTE",
    "Notification",
    "NotificationDraft",
    "PartyRole",
    "PaymentStatus",
    "RESOLVED_DISPUTE_STATUSES",
    "ReviewReminderStage",
]
