"""Domain entities describing a dispute opened against a booking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .booking import BookingParties
from .errors import InvalidRecordError

DISPUTE_ADMIN_LINK = "/admin?tab=disputes"
_DASHBOARD_LINKS = {
    "brand": "/brand-dashboard?tab=bookings",
    "creator": "/creator-dashboard?tab=bookings",
}


class PartyRole(str, Enum):
    """Side of a booking that took an action."""

    BRAND = "brand"
    CREATOR = "creator"

    def counterpart(self) -> "PartyRole":
        """Return the other side of the booking."""

        return PartyRole.CREATOR if self is PartyRole.BRAND else PartyRole.BRAND

    def dashboard_link(self) -> str:
        """Return the dashboard page where this party manages bookings."""

        return _DASHBOARD_LINKS[self.value]


class DisputeStatus(str, Enum):
    """Lifecycle state of a dispute."""

    PENDING_RESPONSE = "pending_response"
    PENDING_ADMIN_REVIEW = "pending_admin_review"
    RESOLVED_REFUND = "resolved_refund"
    RESOLVED_RELEASE = "resolved_release"
    RESOLVED_SPLIT = "resolved_split"
    RESOLVED_PARTIAL = "resolved_partial"

    @property
    def is_resolved(self) -> bool:
        return self.value.startswith("resolved_")


ACTIVE_DISPUTE_STATUSES = (
    DisputeStatus.PENDING_RESPONSE,
    DisputeStatus.PENDING_ADMIN_REVIEW,
)
RESOLVED_DISPUTE_STATUSES = tuple(
    status for status in DisputeStatus if status.is_resolved
)


@dataclass
class Dispute:
    """A disagreement about a booking awaiting a response or a decision."""

    id: str
    booking_id: str
    opened_by_role: PartyRole
    status: DisputeStatus
    response_deadline: datetime
    reminder_sent_day2: bool = False
    reminder_sent_day3: bool = False
    escalated_to_admin: bool = False
    resolution_deadline: datetime | None = None

    def __post_init__(self) -> None:
        if self.escalated_to_admin and self.resolution_deadline is None:
            msg = f"Dispute {self.id} is escalated without a resolution deadline"
            raise InvalidRecordError(msg)

    @property
    def responder_role(self) -> PartyRole:
        """Party expected to answer: whoever did not open the dispute."""

        return self.opened_by_role.counterpart()


@dataclass(frozen=True)
class ActiveDispute:
    """Open dispute joined with the booking parties and amount at stake."""

    dispute: Dispute
    parties: BookingParties
    amount_cents: int = 0

    def responder_user_id(self) -> str:
        if self.dispute.responder_role is PartyRole.CREATOR:
            return self.parties.creator_user_id
        return self.parties.brand_user_id

    def responder_email(self) -> str | None:
        if self.dispute.responder_role is PartyRole.CREATOR:
            return self.parties.creator_email
        return self.parties.brand_email

    def opener_name(self) -> str:
        """Display name of the party that opened the dispute."""

        if self.dispute.opened_by_role is PartyRole.BRAND:
            return self.parties.brand_name
        return self.parties.creator_name

    def responder_link(self) -> str:
        return self.dispute.responder_role.dashboard_link()


__all__ = [
    "ACTIVE_DISPUTE_STATUSES",
    "ActiveDispute",
    "DISPUTE_ADMIN_LINK",
    "Dispute",
    "DisputeStatus",
    "PartyRole",
    "RESOLVED_DISPUTE_STATUSES",
]
