"""SQLAlchemy model for disputes opened against bookings."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, false
from sqlalchemy.orm import relationship

from collabhunts.infrastructure.database import Base


class BookingDisputeModel(Base):
    """Database representation of a booking dispute."""

    __tablename__ = "booking_disputes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    opened_by_role = Column(String(20), nullable=False)
    status = Column(String(40), nullable=False, default="pending_response", index=True)
    response_deadline = Column(DateTime(timezone=True), nullable=False)
    resolution_deadline = Column(DateTime(timezone=True), nullable=True)
    reminder_sent_day2 = Column(Boolean, nullable=True, default=False, server_default=false())
    reminder_sent_day3 = Column(Boolean, nullable=True, default=False, server_default=false())
    escalated_to_admin = Column(Boolean, nullable=True, default=False, server_default=false())

    booking = relationship("BookingModel", lazy="joined")


__all__ = ["BookingDisputeModel"]
