"""Domain entities representing user notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_BOOKING = "booking"
NOTIFICATION_TYPE_DISPUTE = "dispute"


@dataclass(frozen=True)
class NotificationDraft:
    """Notification produced during a monitor run and not yet persisted."""

    user_id: str
    title: str
    message: str
    type: str
    link: str

    @property
    def dedupe_key(self) -> tuple[str, str]:
        return (self.user_id, self.title)


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str | None
    user_id: str
    title: str
    message: str
    type: str
    link: str | None
    read: bool = False
    created_at: datetime | None = None


__all__ = [
    "NOTIFICATION_TYPE_BOOKING",
    "NOTIFICATION_TYPE_DISPUTE",
    "Notification",
    "NotificationDraft",
]
