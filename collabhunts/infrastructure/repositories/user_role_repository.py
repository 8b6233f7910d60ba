"""Persistence helpers for user role lookups."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from collabhunts.infrastructure.models import ProfileModel, UserRoleModel

ADMIN_ROLE = "admin"


class UserRoleRepository:
    """Resolve which users hold a given role."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_user_ids(self, role: str) -> Sequence[str]:
        rows = (
            self.session.query(UserRoleModel.user_id)
            .filter(UserRoleModel.role == role)
            .distinct()
            .order_by(UserRoleModel.user_id.asc())
            .all()
        )
        return [row.user_id for row in rows]

    def list_admin_user_ids(self) -> Sequence[str]:
        return self.list_user_ids(ADMIN_ROLE)

    def list_admin_emails(self) -> Sequence[str]:
        """Return the contact email of every admin that has one."""

        rows = (
            self.session.query(ProfileModel.email)
            .join(UserRoleModel, UserRoleModel.user_id == ProfileModel.id)
            .filter(UserRoleModel.role == ADMIN_ROLE)
            .filter(ProfileModel.email.is_not(None))
            .distinct()
            .all()
        )
        return sorted(row.email for row in rows if row.email)


__all__ = ["ADMIN_ROLE", "UserRoleRepository"]
