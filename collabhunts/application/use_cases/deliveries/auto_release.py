"""Auto-release payments for deliveries the brand did not review in time.

After a creator delivers, the brand has a 72-hour review window. The monitor
reminds the brand at the 48-hour mark, warns once more during the last hour,
and confirms the booking on the brand's behalf once the window elapses. An
open dispute freezes the whole process for that booking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collabhunts.application.use_cases.notifications import NotificationBatch, messages
from collabhunts.domain.entities import DeliveredBooking, ReviewReminderStage
from collabhunts.infrastructure import email
from collabhunts.infrastructure.repositories import BookingRepository, DisputeRepository
from collabhunts.utils import hours_between, now_in_app_timezone

logger = logging.getLogger(__name__)

REVIEW_WINDOW_HOURS = 72.0
REVIEW_REMINDER_WINDOW = (48.0, 49.0)
REVIEW_FINAL_WARNING_WINDOW = (71.0, 72.0)


class DeliveryAction(str, Enum):
    """What the monitor does for a delivery at a given age."""

    WAIT = "wait"
    REMIND = "remind"
    FINAL_WARNING = "final_warning"
    AUTO_RELEASE = "auto_release"


@dataclass
class DeliveryRunSummary:
    """Counters describing one pass of the delivery monitor."""

    bookings_processed: int = 0
    auto_released: int = 0
    reminders_queued: int = 0
    skipped_disputed: int = 0
    failed: int = 0


def plan_delivery_action(hours_since_delivery: float) -> DeliveryAction:
    """Return the action due for a delivery that is ``hours_since_delivery`` old."""

    if hours_since_delivery >= REVIEW_WINDOW_HOURS:
        return DeliveryAction.AUTO_RELEASE
    start, end = REVIEW_FINAL_WARNING_WINDOW
    if start <= hours_since_delivery < end:
        return DeliveryAction.FINAL_WARNING
    start, end = REVIEW_REMINDER_WINDOW
    if start <= hours_since_delivery < end:
        return DeliveryAction.REMIND
    return DeliveryAction.WAIT


def check_delivery_auto_release(
    session: Session,
    *,
    batch: NotificationBatch,
    now: datetime | None = None,
) -> DeliveryRunSummary:
    """Send review reminders and auto-confirm deliveries past the review window.

    Listing failures propagate to the caller. Failures on a single booking are
    logged, rolled back and counted; the booking is evaluated again next run.
    """

    current_time = now or now_in_app_timezone()
    bookings = BookingRepository(session)
    disputes = DisputeRepository(session)
    summary = DeliveryRunSummary()

    candidates = bookings.list_awaiting_review()
    logger.info("Checking %d delivered bookings for auto-release", len(candidates))

    for candidate in candidates:
        summary.bookings_processed += 1
        booking = candidate.booking
        try:
            if disputes.has_open_dispute(booking.id):
                summary.skipped_disputed += 1
                logger.debug("Booking %s has an open dispute; skipping", booking.id)
                continue

            hours = hours_between(booking.delivered_at, current_time)
            action = plan_delivery_action(hours)
            if action is DeliveryAction.AUTO_RELEASE:
                if _auto_release(bookings, candidate, batch, current_time):
                    summary.auto_released += 1
            elif action is DeliveryAction.REMIND:
                if _remind(bookings, candidate, batch, ReviewReminderStage.DAY_TWO):
                    summary.reminders_queued += 1
            elif action is DeliveryAction.FINAL_WARNING:
                if _remind(bookings, candidate, batch, ReviewReminderStage.FINAL_WARNING):
                    summary.reminders_queued += 1
        except SQLAlchemyError:
            session.rollback()
            summary.failed += 1
            logger.exception("Failed to process booking %s", booking.id)

    logger.info(
        "Delivery check finished: %d processed, %d auto-released, %d reminders, "
        "%d disputed, %d failed",
        summary.bookings_processed,
        summary.auto_released,
        summary.reminders_queued,
        summary.skipped_disputed,
        summary.failed,
    )
    return summary


def _remind(
    bookings: BookingRepository,
    candidate: DeliveredBooking,
    batch: NotificationBatch,
    stage: ReviewReminderStage,
) -> bool:
    booking = candidate.booking
    parties = candidate.parties
    if not bookings.claim_review_reminder(booking.id, stage):
        return False

    final_warning = stage is ReviewReminderStage.FINAL_WARNING
    if final_warning:
        batch.add(messages.review_final_warning(parties))
    else:
        batch.add(messages.review_reminder(parties))
    if parties.brand_email:
        email.send_brand_review_reminder_email(
            parties.brand_email,
            creator_name=parties.creator_name,
            amount_cents=booking.total_price_cents,
            final_warning=final_warning,
        )
    logger.info("Queued review reminder stage %d for booking %s", stage, booking.id)
    return True


def _auto_release(
    bookings: BookingRepository,
    candidate: DeliveredBooking,
    batch: NotificationBatch,
    now: datetime,
) -> bool:
    booking = candidate.booking
    parties = candidate.parties
    if not bookings.confirm_delivery(booking.id, confirmed_at=now):
        logger.info("Booking %s was already confirmed elsewhere", booking.id)
        return False

    batch.extend(messages.auto_release_notifications(parties))
    if parties.creator_email:
        email.send_creator_payment_auto_released_email(
            parties.creator_email,
            brand_name=parties.brand_name,
            amount_cents=booking.total_price_cents,
        )
    if parties.brand_email:
        email.send_brand_payment_auto_released_email(
            parties.brand_email,
            creator_name=parties.creator_name,
            amount_cents=booking.total_price_cents,
        )
    logger.info("Auto-released payment for booking %s", booking.id)
    return True


__all__ = [
    "DeliveryAction",
    "DeliveryRunSummary",
    "REVIEW_WINDOW_HOURS",
    "check_delivery_auto_release",
    "plan_delivery_action",
]
