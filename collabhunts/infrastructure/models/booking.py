"""SQLAlchemy models for bookings and the profiles of both parties."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from collabhunts.infrastructure.database import Base


def _new_id() -> str:
    return str(uuid4())


class ProfileModel(Base):
    """Account profile holding the contact email of an auth user."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)


class BrandProfileModel(Base):
    """Brand side of the marketplace."""

    __tablename__ = "brand_profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)

    profile = relationship("ProfileModel", lazy="joined")


class CreatorProfileModel(Base):
    """Creator side of the marketplace."""

    __tablename__ = "creator_profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    display_name = Column(String(255), nullable=False)

    profile = relationship("ProfileModel", lazy="joined")


class BookingModel(Base):
    """Database representation of a creator/brand engagement."""

    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=_new_id)
    brand_profile_id = Column(
        String(36), ForeignKey("brand_profiles.id"), nullable=False, index=True
    )
    creator_profile_id = Column(
        String(36), ForeignKey("creator_profiles.id"), nullable=False, index=True
    )
    total_price_cents = Column(Integer, nullable=False, default=0)
    payment_status = Column(String(30), nullable=False, default="pending")
    delivery_status = Column(String(30), nullable=True, default="not_delivered")
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(30), nullable=True, default="pending")
    review_reminder_stage = Column(Integer, nullable=False, default=0)
    review_reminder_delivered_at = Column(DateTime(timezone=True), nullable=True)

    brand_profile = relationship("BrandProfileModel", lazy="joined")
    creator_profile = relationship("CreatorProfileModel", lazy="joined")


__all__ = [
    "BookingModel",
    "BrandProfileModel",
    "CreatorProfileModel",
    "ProfileModel",
]
