"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy.orm import Session

from collabhunts.domain.entities import Notification, NotificationDraft
from collabhunts.infrastructure.models import NotificationModel
from collabhunts.utils import ensure_app_timezone, ensure_utc, now_in_app_timezone


class NotificationRepository:
    """Insert notification rows and read them back for a recipient."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def bulk_create(self, drafts: Iterable[NotificationDraft]) -> int:
        """Insert every draft in a single transaction and return the row count."""

        created_at = ensure_utc(now_in_app_timezone())
        models = [
            NotificationModel(
                user_id=draft.user_id,
                title=draft.title,
                message=draft.message,
                type=draft.type,
                link=draft.link,
                read=False,
                created_at=created_at,
            )
            for draft in drafts
        ]
        if not models:
            return 0
        self.session.add_all(models)
        self.session.commit()
        return len(models)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            type=model.type,
            link=model.link,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
