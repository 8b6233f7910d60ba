"""Tests for the booking and dispute domain entities."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from collabhunts.domain.entities import (
    ActiveDispute,
    Booking,
    BookingParties,
    BookingStatus,
    DeliveryStatus,
    Dispute,
    DisputeStatus,
    InvalidRecordError,
    PartyRole,
    PaymentStatus,
    RESOLVED_DISPUTE_STATUSES,
)

DELIVERED_AT = datetime(2026, 10, 14, 9, 30, tzinfo=timezone.utc)
PARTIES = BookingParties(
    brand_user_id="brand-user",
    brand_name="Acme Co",
    creator_user_id="creator-user",
    creator_name="Maya Lens",
)


def _booking(**overrides) -> Booking:
    values = dict(
        id="b1",
        brand_profile_id="bp",
        creator_profile_id="cp",
        total_price_cents=1000,
        payment_status=PaymentStatus.PAID,
        delivery_status=DeliveryStatus.DELIVERED,
        delivered_at=DELIVERED_AT,
        status=BookingStatus.ACCEPTED,
    )
    values.update(overrides)
    return Booking(**values)


def _dispute(**overrides) -> Dispute:
    values = dict(
        id="d1",
        booking_id="b1",
        opened_by_role=PartyRole.BRAND,
        status=DisputeStatus.PENDING_RESPONSE,
        response_deadline=DELIVERED_AT,
    )
    values.update(overrides)
    return Dispute(**values)


def test_delivered_booking_requires_timestamp():
    with pytest.raises(InvalidRecordError):
        _booking(delivered_at=None)


def test_undelivered_booking_rejects_timestamp():
    with pytest.raises(InvalidRecordError):
        _booking(delivery_status=DeliveryStatus.NOT_DELIVERED)


def test_revision_requested_may_keep_previous_timestamp():
    booking = _booking(delivery_status=DeliveryStatus.REVISION_REQUESTED)
    assert booking.delivered_at == DELIVERED_AT
    assert booking.review_reminder_stage == 0


def test_party_role_counterpart_and_links():
    assert PartyRole.BRAND.counterpart() is PartyRole.CREATOR
    assert PartyRole.CREATOR.counterpart() is PartyRole.BRAND
    assert PartyRole.BRAND.dashboard_link() == "/brand-dashboard?tab=bookings"


def test_responder_is_the_party_that_did_not_open():
    active = ActiveDispute(dispute=_dispute(opened_by_role=PartyRole.CREATOR), parties=PARTIES)

    assert active.dispute.responder_role is PartyRole.BRAND
    assert active.responder_user_id() == "brand-user"
    assert active.responder_link() == "/brand-dashboard?tab=bookings"


def test_responder_email_and_opener_name():
    parties = BookingParties(
        brand_user_id="brand-user",
        brand_name="Acme Co",
        creator_user_id="creator-user",
        creator_name="Maya Lens",
        brand_email="brand@example.com",
        creator_email="creator@example.com",
    )
    by_brand = ActiveDispute(dispute=_dispute(), parties=parties)
    by_creator = ActiveDispute(
        dispute=_dispute(opened_by_role=PartyRole.CREATOR), parties=parties
    )

    assert by_brand.responder_email() == "creator@example.com"
    assert by_brand.opener_name() == "Acme Co"
    assert by_creator.responder_email() == "brand@example.com"
    assert by_creator.opener_name() == "Maya Lens"
    assert ActiveDispute(dispute=_dispute(), parties=PARTIES).responder_email() is None


def test_escalated_dispute_requires_resolution_deadline():
    with pytest.raises(InvalidRecordError):
        _dispute(escalated_to_admin=True)


def test_resolution_deadline_allowed_before_escalation():
    dispute = _dispute(resolution_deadline=DELIVERED_AT)
    assert dispute.escalated_to_admin is False


def test_resolved_statuses():
    assert DisputeStatus.PENDING_ADMIN_REVIEW.is_resolved is False
    assert {status.value for status in RESOLVED_DISPUTE_STATUSES} == {
        "resolved_refund",
        "resolved_release",
        "resolved_split",
        "resolved_partial",
    }
