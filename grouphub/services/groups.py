"""Group service.

Creating or updating a group also resolves its type group (looked up by
name and kind, created when missing) and its single representative. A
representative whose e-mail belongs to a registered user is linked to that
user; otherwise the address is stored on its own and receives a
registration invite.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from grouphub.core.exceptions import NotFoundError
from grouphub.core.logger import get_logger
from grouphub.core.rbac import Principal, Role
from grouphub.db.models import Group, Representative, TypeGroup, User

from .base import BaseService
from .notifications import RegistrationNotifier
from .users import UserService

logger = get_logger(__name__)

GROUP_FIELDS = (
    "entity",
    "organ",
    "council",
    "acronym",
    "team",
    "unit",
    "email",
    "office_requested",
    "office_indicated",
    "internal_concierge",
    "observations",
    "status",
)


class GroupService(BaseService):
    """CRUD for groups and their representative/type group."""

    def __init__(self, db: Session, notifier: Optional[RegistrationNotifier] = None):
        super().__init__(db)
        self.notifier = notifier or RegistrationNotifier()
        self.users = UserService(db)

    def _query(self):
        return self.db.query(Group).options(
            joinedload(Group.creator).joinedload(User.type_user),
            joinedload(Group.type_group),
            joinedload(Group.representative),
        )

    def list(
        self,
        *,
        creator_user_id: Optional[int] = None,
        status: Optional[str] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Tuple[List[Group], int]:
        query = self._query()
        if creator_user_id is not None:
            query = query.filter(Group.creator_user_id == creator_user_id)
        if status:
            query = query.filter(Group.status == status)
        return self.paginate(query.order_by(Group.id), page, per_page)

    def get(self, group_id: int) -> Group:
        group = self._query().filter(Group.id == group_id).first()
        if group is None:
            raise NotFoundError("Grupo")
        return group

    async def create(self, creator: Principal, data: Dict[str, Any]) -> Group:
        group = Group(
            creator_user_id=creator.id,
            **{field: data.get(field) for field in GROUP_FIELDS if field in data},
        )
        group.type_group = self._resolve_type_group(data["name"], data["type_group"])
        group.representative = await self._resolve_representative(data["representative"])
        self.db.add(group)
        self.commit()
        logger.info("User %s created group %s", creator.id, group.id)
        return self.get(group.id)

    async def update(self, group_id: int, data: Dict[str, Any]) -> Group:
        group = self.get(group_id)
        for field in GROUP_FIELDS:
            if field in data:
                setattr(group, field, data[field])

        previous_type_group = None
        if "name" in data or "type_group" in data:
            previous_type_group = group.type_group
            group.type_group = self._resolve_type_group(
                data.get("name", previous_type_group.name),
                data.get("type_group", previous_type_group.type_group),
            )
        if "representative" in data:
            group.representative = await self._resolve_representative(
                data["representative"], current=group.representative
            )

        if previous_type_group is not None and previous_type_group is not group.type_group:
            self.db.flush()
            self._prune_type_group(previous_type_group)

        self.commit()
        return self.get(group_id)

    def delete(self, group_id: int) -> None:
        """Delete a group with its members, representative and (if unused) type group."""
        group = self.get(group_id)
        representative = group.representative
        type_group = group.type_group

        self.db.delete(group)
        self.db.flush()
        if representative is not None:
            self.db.delete(representative)
        if type_group is not None:
            self._prune_type_group(type_group)

        self.commit()
        logger.info("Deleted group %s", group_id)

    def _prune_type_group(self, type_group: TypeGroup) -> None:
        """Delete a type group once no group refers to it."""
        in_use = self.db.query(Group.id).filter(Group.type_group_id == type_group.id).first()
        if not in_use:
            self.db.delete(type_group)

    def _resolve_type_group(self, name: str, kind: str) -> TypeGroup:
        type_group = self.db.query(TypeGroup).filter(
            TypeGroup.name == name,
            TypeGroup.type_group == kind,
        ).first()
        if type_group is None:
            type_group = TypeGroup(name=name, type_group=kind)
            self.db.add(type_group)
        return type_group

    async def _resolve_representative(
        self,
        email: str,
        current: Optional[Representative] = None,
    ) -> Representative:
        """Point the group's representative at ``email``, reusing the current row."""
        user = self.users.find_active_by_email(email)
        representative = current or Representative()
        changed = current is None or current.email.lower() != email.lower()
        representative.email = email
        representative.user_id = user.id if user else None

        if user is None and changed:
            await self.notifier.send_registration_invite(email, Role.REPRESENTATIVE)
        return representative
