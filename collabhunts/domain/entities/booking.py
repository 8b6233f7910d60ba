"""Domain entities describing a creator/brand booking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .errors import InvalidRecordError


class PaymentStatus(str, Enum):
    """Payment state of a booking. Payments are collected manually."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    PARTIAL = "partial"
    REFUNDED = "refunded"
    DISPUTED = "disputed"


class DeliveryStatus(str, Enum):
    """Progress of the creator's deliverables."""

    NOT_DELIVERED = "not_delivered"
    DELIVERED = "delivered"
    REVISION_REQUESTED = "revision_requested"
    CONFIRMED = "confirmed"


class BookingStatus(str, Enum):
    """Overall lifecycle state of the engagement."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DECLINED = "declined"


class ReviewReminderStage(int, Enum):
    """Highest review reminder already sent to the brand for a delivery."""

    NONE = 0
    DAY_TWO = 1
    FINAL_WARNING = 2


@dataclass(frozen=True)
class BookingParties:
    """Identity of both sides of a booking, resolved from their profiles."""

    brand_user_id: str
    brand_name: str
    creator_user_id: str
    creator_name: str
    brand_email: str | None = None
    creator_email: str | None = None


@dataclass
class Booking:
    """A booking between a brand and a creator."""

    id: str
    brand_profile_id: str
    creator_profile_id: str
    total_price_cents: int
    payment_status: PaymentStatus
    delivery_status: DeliveryStatus
    delivered_at: datetime | None
    status: BookingStatus
    review_reminder_stage: ReviewReminderStage = ReviewReminderStage.NONE
    confirmed_at: datetime | None = None

    def __post_init__(self) -> None:
        delivered_or_later = self.delivery_status in (
            DeliveryStatus.DELIVERED,
            DeliveryStatus.REVISION_REQUESTED,
            DeliveryStatus.CONFIRMED,
        )
        if self.delivery_status is DeliveryStatus.DELIVERED and self.delivered_at is None:
            msg = f"Booking {self.id} is delivered but has no delivery timestamp"
            raise InvalidRecordError(msg)
        if not delivered_or_later and self.delivered_at is not None:
            msg = f"Booking {self.id} has a delivery timestamp but was not delivered"
            raise InvalidRecordError(msg)


@dataclass(frozen=True)
class DeliveredBooking:
    """Booking awaiting review together with the parties to notify."""

    booking: Booking
    parties: BookingParties


__all__ = [
    "Booking",
    "BookingParties",
    "BookingStatus",
    "DeliveredBooking",
    "DeliveryStatus",
    "PaymentStatus",
    "ReviewReminderStage",
]
