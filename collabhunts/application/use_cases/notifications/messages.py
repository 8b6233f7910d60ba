"""Builders for the notifications emitted by the booking monitors."""

from __future__ import annotations

from collabhunts.domain.entities import (
    DISPUTE_ADMIN_LINK,
    NOTIFICATION_TYPE_BOOKING,
    NOTIFICATION_TYPE_DISPUTE,
    ActiveDispute,
    BookingParties,
    NotificationDraft,
    PartyRole,
)

REVIEW_REMINDER_TITLE = "⏰ Review Reminder: 24 Hours Left"
REVIEW_FINAL_WARNING_TITLE = "🚨 Final Warning: Less Than 1 Hour Left"
PAYMENT_AUTO_RELEASED_TITLE = "💰 Payment Auto-Released"
BOOKING_AUTO_CONFIRMED_TITLE = "✅ Booking Auto-Confirmed"
DISPUTE_REMINDER_TITLE = "⏰ Dispute Response Reminder"
DISPUTE_FINAL_WARNING_TITLE = "🚨 Final Warning: Dispute Response Due"
DISPUTE_ESCALATED_TITLE = "⚠️ Dispute Auto-Escalated"
DISPUTE_RESOLUTION_DUE_TITLE = "⏰ Dispute Resolution Due Soon"


def event_title(title: str, subject: str) -> str:
    """Qualify ``title`` with the booking or dispute it is about.

    Notifications are deduplicated by recipient and title within a run, so
    the subject keeps two different events for one recipient apart.
    """

    return f"{title} ({subject})"


def _dispute_subject(active: ActiveDispute) -> str:
    return f"{active.parties.brand_name} vs {active.parties.creator_name}"


_BRAND_LINK = PartyRole.BRAND.dashboard_link()
_CREATOR_LINK = PartyRole.CREATOR.dashboard_link()


def review_reminder(parties: BookingParties) -> NotificationDraft:
    return NotificationDraft(
        user_id=parties.brand_user_id,
        title=event_title(REVIEW_REMINDER_TITLE, parties.creator_name),
        message=(
            f"You have 24 hours left to review the deliverables from "
            f"{parties.creator_name}. After that the payment is released automatically."
        ),
        type=NOTIFICATION_TYPE_BOOKING,
        link=_BRAND_LINK,
    )


def review_final_warning(parties: BookingParties) -> NotificationDraft:
    return NotificationDraft(
        user_id=parties.brand_user_id,
        title=event_title(REVIEW_FINAL_WARNING_TITLE, parties.creator_name),
        message=(
            f"Less than 1 hour left to review {parties.creator_name}'s deliverables. "
            "Approve them or open a dispute before the payment is released."
        ),
        type=NOTIFICATION_TYPE_BOOKING,
        link=_BRAND_LINK,
    )


def auto_release_notifications(parties: BookingParties) -> list[NotificationDraft]:
    """Notify both sides that the review window closed without a decision."""

    return [
        NotificationDraft(
            user_id=parties.creator_user_id,
            title=event_title(PAYMENT_AUTO_RELEASED_TITLE, parties.brand_name),
            message=(
                f"{parties.brand_name} didn't review your deliverables within 72 "
                "hours, so the booking was confirmed and your payment released."
            ),
            type=NOTIFICATION_TYPE_BOOKING,
            link=_CREATOR_LINK,
        ),
        NotificationDraft(
            user_id=parties.brand_user_id,
            title=event_title(BOOKING_AUTO_CONFIRMED_TITLE, parties.creator_name),
            message=(
                f"The 72-hour review window for {parties.creator_name}'s deliverables "
                "ended, so the booking was confirmed automatically."
            ),
            type=NOTIFICATION_TYPE_BOOKING,
            link=_BRAND_LINK,
        ),
    ]


def dispute_response_reminder(active: ActiveDispute) -> NotificationDraft:
    return NotificationDraft(
        user_id=active.responder_user_id(),
        title=event_title(DISPUTE_REMINDER_TITLE, active.opener_name()),
        message="You have 2 days left to respond to the dispute.",
        type=NOTIFICATION_TYPE_DISPUTE,
        link=active.responder_link(),
    )


def dispute_final_warning(active: ActiveDispute) -> NotificationDraft:
    return NotificationDraft(
        user_id=active.responder_user_id(),
        title=event_title(DISPUTE_FINAL_WARNING_TITLE, active.opener_name()),
        message=(
            "Less than 24 hours to respond! Failure may result in automatic resolution."
        ),
        type=NOTIFICATION_TYPE_DISPUTE,
        link=active.responder_link(),
    )


def dispute_escalated(admin_user_id: str, active: ActiveDispute) -> NotificationDraft:
    return NotificationDraft(
        user_id=admin_user_id,
        title=event_title(DISPUTE_ESCALATED_TITLE, _dispute_subject(active)),
        message="Response deadline passed. Requires immediate admin review.",
        type=NOTIFICATION_TYPE_DISPUTE,
        link=DISPUTE_ADMIN_LINK,
    )


def dispute_resolution_due(
    admin_user_id: str, active: ActiveDispute
) -> NotificationDraft:
    parties = active.parties
    return NotificationDraft(
        user_id=admin_user_id,
        title=event_title(DISPUTE_RESOLUTION_DUE_TITLE, _dispute_subject(active)),
        message=(
            f"Dispute between {parties.brand_name} and {parties.creator_name} "
            "needs resolution within 24 hours."
        ),
        type=NOTIFICATION_TYPE_DISPUTE,
        link=DISPUTE_ADMIN_LINK,
    )
