"""Persistence helpers for bookings awaiting delivery review."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from collabhunts.domain.entities import (
    Booking,
    BookingParties,
    BookingStatus,
    DeliveredBooking,
    DeliveryStatus,
    InvalidRecordError,
    PaymentStatus,
    ReviewReminderStage,
)
from collabhunts.infrastructure.models import (
    BookingModel,
    BrandProfileModel,
    CreatorProfileModel,
)
from collabhunts.utils import ensure_app_timezone, ensure_utc

logger = logging.getLogger(__name__)


class BookingRepository:
    """Read delivered bookings and apply guarded state transitions."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_awaiting_review(self) -> Sequence[DeliveredBooking]:
        """Return paid bookings whose deliverables wait for the brand's review.

        Rows that cannot be mapped to a valid :class:`Booking` are logged and
        left out.
        """

        query = (
            self.session.query(BookingModel)
            .options(
                joinedload(BookingModel.brand_profile).joinedload(
                    BrandProfileModel.profile
                ),
                joinedload(BookingModel.creator_profile).joinedload(
                    CreatorProfileModel.profile
                ),
            )
            .filter(BookingModel.delivery_status == DeliveryStatus.DELIVERED.value)
            .filter(BookingModel.payment_status == PaymentStatus.PAID.value)
            .filter(BookingModel.delivered_at.is_not(None))
            .order_by(BookingModel.delivered_at.asc(), BookingModel.id.asc())
        )
        results: list[DeliveredBooking] = []
        for model in query.all():
            try:
                results.append(
                    DeliveredBooking(
                        booking=self._to_entity(model),
                        parties=self._parties_from_model(model),
                    )
                )
            except InvalidRecordError as exc:
                logger.warning("Skipping booking %s: %s", model.id, exc)
        return results

    def confirm_delivery(self, booking_id: str, *, confirmed_at: datetime) -> bool:
        """Auto-confirm ``booking_id`` if it is still delivered and paid.

        Returns ``True`` when this call performed the transition.
        """

        updated = (
            self.session.query(BookingModel)
            .filter(BookingModel.id == booking_id)
            .filter(BookingModel.delivery_status == DeliveryStatus.DELIVERED.value)
            .filter(BookingModel.payment_status == PaymentStatus.PAID.value)
            .update(
                {
                    BookingModel.delivery_status: DeliveryStatus.CONFIRMED.value,
                    BookingModel.status: BookingStatus.COMPLETED.value,
                    BookingModel.confirmed_at: ensure_utc(confirmed_at),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    def claim_review_reminder(
        self, booking_id: str, stage: ReviewReminderStage
    ) -> bool:
        """Record that the review reminder ``stage`` is being sent.

        The claim belongs to the delivery it was made for: a booking that went
        back to revision and was delivered again has a new ``delivered_at``,
        so its reminders can be claimed again. Returns ``False`` when this
        stage (or a later one) was already claimed for the current delivery.
        """

        updated = (
            self.session.query(BookingModel)
            .filter(BookingModel.id == booking_id)
            .filter(BookingModel.delivery_status == DeliveryStatus.DELIVERED.value)
            .filter(
                or_(
                    BookingModel.review_reminder_stage < int(stage),
                    BookingModel.review_reminder_delivered_at.is_(None),
                    BookingModel.review_reminder_delivered_at
                    != BookingModel.delivered_at,
                )
            )
            .update(
                {
                    BookingModel.review_reminder_stage: int(stage),
                    BookingModel.review_reminder_delivered_at: BookingModel.delivered_at,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    @staticmethod
    def _parties_from_model(model: BookingModel) -> BookingParties:
        brand = model.brand_profile
        creator = model.creator_profile
        if brand is None or creator is None:
            msg = f"Booking {model.id} is missing its brand or creator profile"
            raise InvalidRecordError(msg)
        return BookingParties(
            brand_user_id=brand.user_id,
            brand_name=brand.company_name,
            creator_user_id=creator.user_id,
            creator_name=creator.display_name,
            brand_email=brand.profile.email if brand.profile else None,
            creator_email=creator.profile.email if creator.profile else None,
        )

    @staticmethod
    def _to_entity(model: BookingModel) -> Booking:
        try:
            payment_status = PaymentStatus(model.payment_status)
            delivery_status = DeliveryStatus(
                model.delivery_status or DeliveryStatus.NOT_DELIVERED.value
            )
            status = BookingStatus(model.status or BookingStatus.PENDING.value)
            reminder_stage = ReviewReminderStage(model.review_reminder_stage or 0)
        except ValueError as exc:
            raise InvalidRecordError(f"Booking {model.id}: {exc}") from exc
        return Booking(
            id=model.id,
            brand_profile_id=model.brand_profile_id,
            creator_profile_id=model.creator_profile_id,
            total_price_cents=model.total_price_cents or 0,
            payment_status=payment_status,
            delivery_status=delivery_status,
            delivered_at=ensure_app_timezone(model.delivered_at),
            status=status,
            review_reminder_stage=reminder_stage,
            confirmed_at=ensure_app_timezone(model.confirmed_at),
        )


__all__ = ["BookingRepository"]
