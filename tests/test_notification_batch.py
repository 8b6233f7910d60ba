"""Tests for batching and deduplicating monitor notifications."""

from __future__ import annotations

from collabhunts.application.use_cases.notifications import NotificationBatch
from collabhunts.domain.entities import NotificationDraft
from collabhunts.infrastructure.repositories import NotificationRepository


def _draft(user_id: str, title: str, message: str = "body") -> NotificationDraft:
    return NotificationDraft(
        user_id=user_id, title=title, message=message, type="booking", link="/x"
    )


def test_pending_collapses_same_recipient_and_title():
    batch = NotificationBatch()
    batch.add(_draft("u1", "Reminder", message="first"))
    batch.add(_draft("u1", "Reminder", message="second"))
    batch.add(_draft("u1", "Other"))
    batch.add(_draft("u2", "Reminder"))

    pending = batch.pending()

    assert [(d.user_id, d.title) for d in pending] == [
        ("u1", "Reminder"),
        ("u1", "Other"),
        ("u2", "Reminder"),
    ]
    assert pending[0].message == "first"
    assert len(batch) == 4


def test_flush_inserts_unique_rows_once(db_session):
    batch = NotificationBatch()
    batch.extend([_draft("u1", "A"), _draft("u1", "A"), _draft("u2", "A")])

    assert batch.flush(db_session) == 2
    assert len(batch) == 0
    assert batch.flush(db_session) == 0

    stored = NotificationRepository(db_session).list_for_user("u1")
    assert len(stored) == 1
    assert stored[0].read is False
    assert stored[0].created_at is not None
    assert stored[0].created_at.tzinfo is not None


def test_flush_empty_batch_does_not_touch_database():
    class ExplodingSession:
        def __getattr__(self, name):
            raise AssertionError(f"session.{name} should not be used")

    assert NotificationBatch().flush(ExplodingSession()) == 0


def test_bulk_create_without_drafts_returns_zero(db_session):
    assert NotificationRepository(db_session).bulk_create([]) == 0
