"""Repository implementations for infrastructure layer."""

from .booking_repository import BookingRepository
from .dispute_repository import DisputeRepository
from .notification_repository import NotificationRepository
from .user_role_repository import ADMIN_ROLE, UserRoleRepository

__all__ = [
    "ADMIN_ROLE",
    "BookingRepository",
    "DisputeRepository",
    "NotificationRepository",
    "UserRoleRepository",
]
