"""
Permission Repository - Data Access Layer
"""
from typing import Iterable, List
from sqlalchemy import select, insert
from sqlalchemy.orm import Session

from storefront.models.user import Permission, users_permissions


class PermissionRepository:
    """Repository for permission codes granted to users"""

    def __init__(self, db: Session):
        self.db = db

    def get_all_for_user(self, user_id: int) -> List[str]:
        """Get the permission codes a user holds"""
        stmt = (
            select(Permission.code)
            .join(users_permissions, users_permissions.c.permission_id == Permission.id)
            .where(users_permissions.c.user_id == user_id)
            .order_by(Permission.code)
        )
        return list(self.db.scalars(stmt))

    def add_for_user(self, user_id: int, *codes: str) -> None:
        """Grant permission codes; unknown codes are ignored"""
        if not codes:
            return
        permission_ids = self.db.scalars(select(Permission.id).where(Permission.code.in_(codes))).all()
        if permission_ids:
            self.db.execute(
                insert(users_permissions),
                [{"user_id": user_id, "permission_id": pid} for pid in permission_ids]
            )
        self.db.commit()

    def ensure_codes(self, codes: Iterable[str]) -> None:
        """Insert any permission codes that are not stored yet"""
        existing = set(self.db.scalars(select(Permission.code)))
        missing = [code for code in codes if code not in existing]
        for code in missing:
            self.db.add(Permission(code=code))
        if missing:
            self.db.commit()
