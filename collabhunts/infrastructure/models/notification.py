"""SQLAlchemy models for persisted notifications and user roles."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String, Text, false

from collabhunts.infrastructure.database import Base
from collabhunts.utils import ensure_utc, now_in_app_timezone


def _utc_now():
    return ensure_utc(now_in_app_timezone())


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    link = Column(String(255), nullable=True)
    read = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=_utc_now
    )


class UserRoleModel(Base):
    """Role granted to an auth user."""

    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    role = Column(String(30), nullable=False)


__all__ = ["NotificationModel", "UserRoleModel"]
