"""Shared fixtures: a throwaway SQLite database and row builders."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="collabhunts-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
for _name in ("APP_TIMEZONE", "CRON_SECRET", "SENDGRID_API_KEY", "SENDGRID_SENDER"):
    os.environ.pop(_name, None)

from collabhunts.infrastructure import database  # noqa: E402
from collabhunts.infrastructure.models import (  # noqa: E402
    BookingDisputeModel,
    BookingModel,
    BrandProfileModel,
    CreatorProfileModel,
    ProfileModel,
    UserRoleModel,
)

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def db_session():
    """Yield a session bound to freshly created tables."""

    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@dataclass
class Seeded:
    booking_id: str
    brand_user_id: str
    creator_user_id: str


@dataclass
class Seeder:
    """Insert marketplace rows the monitors read."""

    session: object
    _counter: int = field(default=0)

    def _next(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter}"

    def profile(self, user_id: str, email: str | None = None) -> str:
        self.session.add(ProfileModel(id=user_id, email=email, full_name=user_id))
        self.session.commit()
        return user_id

    def admin(self, email: str | None = None) -> str:
        user_id = self.profile(self._next("admin"), email=email)
        self.session.add(UserRoleModel(user_id=user_id, role="admin"))
        self.session.commit()
        return user_id

    def booking(
        self,
        *,
        hours_since_delivery: float | None = None,
        delivery_status: str = "delivered",
        payment_status: str = "paid",
        total_price_cents: int = 25000,
        brand_user_id: str | None = None,
        creator_user_id: str | None = None,
        brand_email: str | None = None,
        creator_email: str | None = None,
        brand_name: str = "Acme Co",
        creator_name: str = "Maya Lens",
        review_reminder_stage: int = 0,
        now: datetime = NOW,
    ) -> Seeded:
        if brand_user_id is None:
            brand_user_id = self.profile(self._next("brand-user"), email=brand_email)
        if creator_user_id is None:
            creator_user_id = self.profile(
                self._next("creator-user"), email=creator_email
            )

        brand = BrandProfileModel(
            id=self._next("brand"), user_id=brand_user_id, company_name=brand_name
        )
        creator = CreatorProfileModel(
            id=self._next("creator"),
            user_id=creator_user_id,
            display_name=creator_name,
        )
        delivered_at = None
        if hours_since_delivery is not None:
            delivered_at = now - timedelta(hours=hours_since_delivery)
        booking = BookingModel(
            id=self._next("booking"),
            brand_profile_id=brand.id,
            creator_profile_id=creator.id,
            total_price_cents=total_price_cents,
            payment_status=payment_status,
            delivery_status=delivery_status,
            delivered_at=delivered_at,
            status="accepted",
            review_reminder_stage=review_reminder_stage,
        )
        self.session.add_all([brand, creator])
        self.session.flush()
        self.session.add(booking)
        self.session.commit()
        return Seeded(
            booking_id=booking.id,
            brand_user_id=brand_user_id,
            creator_user_id=creator_user_id,
        )

    def dispute(
        self,
        booking_id: str,
        *,
        opened_by_role: str = "brand",
        status: str = "pending_response",
        hours_until_response_deadline: float = 72.0,
        hours_until_resolution_deadline: float | None = None,
        reminder_sent_day2: bool = False,
        reminder_sent_day3: bool = False,
        escalated_to_admin: bool = False,
        now: datetime = NOW,
    ) -> str:
        resolution_deadline = None
        if hours_until_resolution_deadline is not None:
            resolution_deadline = now + timedelta(hours=hours_until_resolution_deadline)
        dispute = BookingDisputeModel(
            id=self._next("dispute"),
            booking_id=booking_id,
            opened_by_role=opened_by_role,
            status=status,
            response_deadline=now + timedelta(hours=hours_until_response_deadline),
            resolution_deadline=resolution_deadline,
            reminder_sent_day2=reminder_sent_day2,
            reminder_sent_day3=reminder_sent_day3,
            escalated_to_admin=escalated_to_admin,
        )
        self.session.add(dispute)
        self.session.commit()
        return dispute.id


@pytest.fixture()
def seed(db_session) -> Seeder:
    return Seeder(session=db_session)


@pytest.fixture()
def sent_emails(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, str]]:
    """Capture outgoing emails instead of calling SendGrid."""

    from collabhunts.infrastructure import email as email_module

    captured: list[dict[str, str]] = []

    def _fake_send(subject: str, html_content: str, recipient: str) -> bool:
        captured.append({"subject": subject, "html": html_content, "to": recipient})
        return True

    monkeypatch.setattr(email_module, "send_email", _fake_send)
    return captured
