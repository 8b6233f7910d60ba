"""Collect notifications produced during a monitor run and insert them once."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collabhunts.domain.entities import NotificationDraft
from collabhunts.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationBatch:
    """Accumulate drafts from every monitor and flush them in one bulk insert.

    Drafts sharing the same ``(recipient, title)`` pair are collapsed, so an
    event reported twice within one run reaches the recipient once. Nothing
    is deduplicated across runs.
    """

    def __init__(self) -> None:
        self._drafts: list[NotificationDraft] = []

    def __len__(self) -> int:
        return len(self._drafts)

    def add(self, draft: NotificationDraft) -> None:
        self._drafts.append(draft)

    def extend(self, drafts: Iterable[NotificationDraft]) -> None:
        for draft in drafts:
            self.add(draft)

    def pending(self) -> list[NotificationDraft]:
        """Return queued drafts without duplicates, preserving order."""

        unique: list[NotificationDraft] = []
        seen: set[tuple[str, str]] = set()
        for draft in self._drafts:
            if draft.dedupe_key in seen:
                continue
            seen.add(draft.dedupe_key)
            unique.append(draft)
        return unique

    def flush(self, session: Session) -> int:
        """Insert the pending drafts and return how many rows were written.

        A failed insert is logged and reported as zero rows; state changes
        committed earlier in the run are left untouched.
        """

        drafts = self.pending()
        self._drafts.clear()
        if not drafts:
            return 0

        try:
            inserted = NotificationRepository(session).bulk_create(drafts)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Failed to insert %d notifications", len(drafts))
            return 0

        logger.info("Inserted %d notifications", inserted)
        return inserted


__all__ = ["NotificationBatch"]
