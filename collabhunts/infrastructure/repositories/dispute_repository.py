"""Persistence helpers for booking disputes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import false, or_
from sqlalchemy.orm import Session, joinedload

from collabhunts.domain.entities import (
    ACTIVE_DISPUTE_STATUSES,
    ActiveDispute,
    BookingParties,
    Dispute,
    DisputeStatus,
    InvalidRecordError,
    PartyRole,
    RESOLVED_DISPUTE_STATUSES,
)
from collabhunts.infrastructure.models import (
    BookingDisputeModel,
    BookingModel,
    BrandProfileModel,
    CreatorProfileModel,
)
from collabhunts.utils import ensure_app_timezone, ensure_utc

logger = logging.getLogger(__name__)

_REMINDER_COLUMNS = {
    2: BookingDisputeModel.reminder_sent_day2,
    3: BookingDisputeModel.reminder_sent_day3,
}


def _is_unset(column):
    return or_(column.is_(None), column == false())


class DisputeRepository:
    """Read open disputes and apply flag-gated, conditional updates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active(self) -> Sequence[ActiveDispute]:
        """Return disputes awaiting a response or an admin decision.

        Rows that cannot be mapped to a valid :class:`Dispute` are logged and
        left out.
        """

        query = (
            self.session.query(BookingDisputeModel)
            .options(
                joinedload(BookingDisputeModel.booking)
                .joinedload(BookingModel.brand_profile)
                .joinedload(BrandProfileModel.profile),
                joinedload(BookingDisputeModel.booking)
                .joinedload(BookingModel.creator_profile)
                .joinedload(CreatorProfileModel.profile),
            )
            .filter(
                BookingDisputeModel.status.in_(
                    [status.value for status in ACTIVE_DISPUTE_STATUSES]
                )
            )
            .order_by(BookingDisputeModel.response_deadline.asc())
        )
        results: list[ActiveDispute] = []
        for model in query.all():
            try:
                results.append(self._to_active(model))
            except InvalidRecordError as exc:
                logger.warning("Skipping dispute %s: %s", model.id, exc)
        return results

    def has_open_dispute(self, booking_id: str) -> bool:
        """Return ``True`` when a non-resolved dispute exists for ``booking_id``."""

        count = (
            self.session.query(BookingDisputeModel.id)
            .filter(BookingDisputeModel.booking_id == booking_id)
            .filter(
                BookingDisputeModel.status.notin_(
                    [status.value for status in RESOLVED_DISPUTE_STATUSES]
                )
            )
            .count()
        )
        return count > 0

    def mark_reminder_sent(self, dispute_id: str, *, day: int) -> bool:
        """Set the reminder flag for ``day`` (2 or 3) if it is still unset.

        Returns ``True`` only for the call that flipped the flag, so the caller
        can emit the reminder exactly once.
        """

        column = _REMINDER_COLUMNS.get(day)
        if column is None:
            raise ValueError(f"Unsupported reminder day: {day}")
        updated = (
            self.session.query(BookingDisputeModel)
            .filter(BookingDisputeModel.id == dispute_id)
            .filter(
                BookingDisputeModel.status == DisputeStatus.PENDING_RESPONSE.value
            )
            .filter(_is_unset(column))
            .update({column: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated == 1

    def escalate(self, dispute_id: str, *, resolution_deadline: datetime) -> bool:
        """Move a dispute whose response deadline lapsed to admin review."""

        updated = (
            self.session.query(BookingDisputeModel)
            .filter(BookingDisputeModel.id == dispute_id)
            .filter(
                BookingDisputeModel.status == DisputeStatus.PENDING_RESPONSE.value
            )
            .filter(_is_unset(BookingDisputeModel.escalated_to_admin))
            .update(
                {
                    BookingDisputeModel.status: DisputeStatus.PENDING_ADMIN_REVIEW.value,
                    BookingDisputeModel.escalated_to_admin: True,
                    BookingDisputeModel.resolution_deadline: ensure_utc(
                        resolution_deadline
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    def _to_active(self, model: BookingDisputeModel) -> ActiveDispute:
        dispute = self._to_entity(model)
        booking = model.booking
        if booking is None:
            raise InvalidRecordError(f"Dispute {model.id} references a missing booking")
        brand = booking.brand_profile
        creator = booking.creator_profile
        if brand is None or creator is None:
            msg = f"Booking {booking.id} is missing its brand or creator profile"
            raise InvalidRecordError(msg)
        parties = BookingParties(
            brand_user_id=brand.user_id,
            brand_name=brand.company_name,
            creator_user_id=creator.user_id,
            creator_name=creator.display_name,
            brand_email=brand.profile.email if brand.profile else None,
            creator_email=creator.profile.email if creator.profile else None,
        )
        return ActiveDispute(
            dispute=dispute,
            parties=parties,
            amount_cents=booking.total_price_cents or 0,
        )

    @staticmethod
    def _to_entity(model: BookingDisputeModel) -> Dispute:
        try:
            opened_by = PartyRole(model.opened_by_role)
            status = DisputeStatus(model.status)
        except ValueError as exc:
            raise InvalidRecordError(f"Dispute {model.id}: {exc}") from exc
        if model.response_deadline is None:
            raise InvalidRecordError(f"Dispute {model.id} has no response deadline")

        return Dispute(
            id=model.id,
            booking_id=model.booking_id,
            opened_by_role=opened_by,
            status=status,
            response_deadline=ensure_app_timezone(model.response_deadline),
            reminder_sent_day2=bool(model.reminder_sent_day2),
            reminder_sent_day3=bool(model.reminder_sent_day3),
            escalated_to_admin=bool(model.escalated_to_admin),
            resolution_deadline=ensure_app_timezone(model.resolution_deadline),
        )


__all__ = ["DisputeRepository"]
