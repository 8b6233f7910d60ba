"""Enforce response and resolution deadlines on open disputes."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collabhunts.application.use_cases.notifications import NotificationBatch, messages
from collabhunts.domain.entities import ActiveDispute, DisputeStatus
from collabhunts.infrastructure import email
from collabhunts.infrastructure.repositories import DisputeRepository, UserRoleRepository
from collabhunts.utils import hours_between, now_in_app_timezone

logger = logging.getLogger(__name__)

DAY_TWO_REMINDER_HOURS = 48.0
FINAL_REMINDER_HOURS = 24.0
RESOLUTION_WINDOW = timedelta(days=7)
RESOLUTION_WARNING_HOURS = 24.0


@dataclass
class DisputeRunSummary:
    """Counters describing one pass of the dispute monitor."""

    disputes_processed: int = 0
    reminders_sent: int = 0
    escalated: int = 0
    resolution_warnings: int = 0
    failed: int = 0


class _AdminDirectory:
    """Admin recipients, looked up once per run on first use."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._user_ids: Sequence[str] | None = None
        self._emails: Sequence[str] | None = None

    def user_ids(self) -> Sequence[str]:
        if self._user_ids is None:
            try:
                self._user_ids = UserRoleRepository(self._session).list_admin_user_ids()
            except SQLAlchemyError:
                self._session.rollback()
                logger.exception("Failed to load admin users; no admin will be notified")
                self._user_ids = []
        return self._user_ids

    def emails(self) -> Sequence[str]:
        if self._emails is None:
            try:
                self._emails = UserRoleRepository(self._session).list_admin_emails()
            except SQLAlchemyError:
                self._session.rollback()
                logger.exception("Failed to load admin emails")
                self._emails = []
        return self._emails


def check_dispute_deadlines(
    session: Session,
    *,
    batch: NotificationBatch,
    now: datetime | None = None,
) -> DisputeRunSummary:
    """Remind responders, escalate lapsed disputes and warn admins.

    Listing failures propagate to the caller. Failures on a single dispute are
    logged, rolled back and counted; the dispute is evaluated again next run.
    """

    current_time = now or now_in_app_timezone()
    repository = DisputeRepository(session)
    admins = _AdminDirectory(session)
    summary = DisputeRunSummary()

    active_disputes = repository.list_active()
    logger.info("Checking deadlines for %d active disputes", len(active_disputes))

    for active in active_disputes:
        summary.disputes_processed += 1
        try:
            if active.dispute.status is DisputeStatus.PENDING_RESPONSE:
                _check_response_deadline(
                    repository, active, batch, admins, current_time, summary
                )
            elif active.dispute.status is DisputeStatus.PENDING_ADMIN_REVIEW:
                _check_resolution_deadline(active, batch, admins, current_time, summary)
        except SQLAlchemyError:
            session.rollback()
            summary.failed += 1
            logger.exception("Failed to process dispute %s", active.dispute.id)

    logger.info(
        "Dispute check finished: %d processed, %d reminders, %d escalated, "
        "%d resolution warnings, %d failed",
        summary.disputes_processed,
        summary.reminders_sent,
        summary.escalated,
        summary.resolution_warnings,
        summary.failed,
    )
    return summary


def _check_response_deadline(
    repository: DisputeRepository,
    active: ActiveDispute,
    batch: NotificationBatch,
    admins: _AdminDirectory,
    now: datetime,
    summary: DisputeRunSummary,
) -> None:
    dispute = active.dispute
    hours_left = hours_between(now, dispute.response_deadline)

    day_two_due = FINAL_REMINDER_HOURS < hours_left <= DAY_TWO_REMINDER_HOURS
    if day_two_due and not dispute.reminder_sent_day2:
        if repository.mark_reminder_sent(dispute.id, day=2):
            batch.add(messages.dispute_response_reminder(active))
            _email_responder(active, hours_left)
            summary.reminders_sent += 1
            logger.info("Sent day 2 reminder for dispute %s", dispute.id)

    if 0 < hours_left <= FINAL_REMINDER_HOURS and not dispute.reminder_sent_day3:
        if repository.mark_reminder_sent(dispute.id, day=3):
            batch.add(messages.dispute_final_warning(active))
            _email_responder(active, hours_left)
            summary.reminders_sent += 1
            logger.info("Sent day 3 warning for dispute %s", dispute.id)

    if hours_left <= 0 and not dispute.escalated_to_admin:
        resolution_deadline = now + RESOLUTION_WINDOW
        if not repository.escalate(dispute.id, resolution_deadline=resolution_deadline):
            logger.info("Dispute %s changed before it could be escalated", dispute.id)
            return
        summary.escalated += 1
        for admin_id in admins.user_ids():
            batch.add(messages.dispute_escalated(admin_id, active))
        for admin_email in admins.emails():
            email.send_admin_dispute_escalated_email(
                admin_email,
                brand_name=active.parties.brand_name,
                creator_name=active.parties.creator_name,
                amount_cents=active.amount_cents,
                resolution_deadline=resolution_deadline,
            )
        logger.info("Auto-escalated dispute %s to admin review", dispute.id)


def _email_responder(active: ActiveDispute, hours_left: float) -> None:
    recipient = active.responder_email()
    if not recipient:
        return
    email.send_dispute_response_needed_email(
        recipient,
        other_party_name=active.opener_name(),
        hours_remaining=math.ceil(hours_left),
        dashboard_path=active.responder_link(),
    )


def _check_resolution_deadline(
    active: ActiveDispute,
    batch: NotificationBatch,
    admins: _AdminDirectory,
    now: datetime,
    summary: DisputeRunSummary,
) -> None:
    deadline = active.dispute.resolution_deadline
    if deadline is None:
        return

    # Not flag-gated: admins are warned on every run inside the window.
    hours_left = hours_between(now, deadline)
    if 0 < hours_left <= RESOLUTION_WARNING_HOURS:
        for admin_id in admins.user_ids():
            batch.add(messages.dispute_resolution_due(admin_id, active))
        summary.resolution_warnings += 1


__all__ = [
    "DAY_TWO_REMINDER_HOURS",
    "DisputeRunSummary",
    "FINAL_REMINDER_HOURS",
    "RESOLUTION_WINDOW",
    "check_dispute_deadlines",
]
