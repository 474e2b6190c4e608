"""Database-backed ownership lookups used by the policy evaluator."""

from typing import Optional

from sqlalchemy.orm import Session

from grouphub.core.exceptions import NotFoundError
from grouphub.db.models import Group


class GroupOwnershipLookup:
    """Resolves creator and representative of a group."""

    def __init__(self, db: Session):
        self.db = db

    def _group(self, group_id: int) -> Group:
        group = self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Grupo")
        return group

    def creator_of(self, group_id: int) -> int:
        return self._group(group_id).creator_user_id

    def representative_user_of(self, group_id: int) -> Optional[int]:
        representative = self._group(group_id).representative
        return representative.user_id if representative else None
