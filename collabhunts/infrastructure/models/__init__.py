"""ORM models used by the application infrastructure."""

from .booking import BookingModel, BrandProfileModel, CreatorProfileModel, ProfileModel
from .dispute import BookingDisputeModel
from .notification import NotificationModel, UserRoleModel

__all__ = [
    "BookingDisputeModel",
    "BookingModel",
    "BrandProfileModel",
    "CreatorProfileModel",
    "NotificationModel",
    "ProfileModel",
    "UserRoleModel",
]
