"""Group member service."""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grouphub.core.exceptions import NotFoundError, PersistenceError, ValidationError
from grouphub.core.logger import get_logger
from grouphub.core.rbac import Role
from grouphub.db.models import Group, Member

from .base import BaseService
from .notifications import RegistrationNotifier
from .users import UserService

logger = get_logger(__name__)

EDITABLE_FIELDS = ("role", "phone", "entry_date", "departure_date")
DEPARTURE_BEFORE_ENTRY = "O campo departure_date deve ser uma data igual ou posterior a entry_date."


class MemberService(BaseService):
    """Lists, creates (in bulk), edits and removes members of a group."""

    def __init__(self, db: Session, notifier: Optional[RegistrationNotifier] = None):
        super().__init__(db)
        self.notifier = notifier or RegistrationNotifier()
        self.users = UserService(db)

    def _group(self, group_id: int) -> Group:
        group = self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Grupo")
        return group

    def _member(self, group_id: int, member_id: int) -> Member:
        member = self.db.query(Member).filter(
            Member.id == member_id,
            Member.group_id == group_id,
        ).first()
        if member is None:
            raise NotFoundError("Membro")
        return member

    def list(self, group_id: int) -> List[Member]:
        self._group(group_id)
        return (
            self.db.query(Member)
            .filter(Member.group_id == group_id)
            .order_by(Member.id)
            .all()
        )

    async def create_many(self, group_id: int, entries: List[Dict[str, Any]]) -> List[Member]:
        """
        Add several members to a group in a single transaction.

        Either every entry is persisted or none is: any failure rolls the
        whole batch back and is re-raised.

        Raises:
            NotFoundError: if the group does not exist
            PersistenceError: if the database rejects any row
            NotificationError: if a registration e-mail cannot be delivered
        """
        try:
            self._group(group_id)
            members = [await self._create_member(group_id, entry) for entry in entries]
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Bulk member creation failed for group %s", group_id)
            raise PersistenceError() from exc
        except Exception:
            self.db.rollback()
            logger.warning("Bulk member creation for group %s rolled back", group_id)
            raise

        logger.info("Added %d members to group %s", len(members), group_id)
        return members

    async def _create_member(self, group_id: int, data: Dict[str, Any]) -> Member:
        user = self.users.find_active_by_email(data["email"])
        if user is None:
            await self.notifier.send_registration_invite(data["email"], Role.MEMBER)

        member = Member(
            group_id=group_id,
            user_id=user.id if user else None,
            email=data["email"],
            role=data["role"],
            phone=data.get("phone"),
            entry_date=data.get("entry_date"),
            departure_date=data.get("departure_date"),
        )
        self.db.add(member)
        self.db.flush()
        return member

    def edit(self, group_id: int, member_id: int, data: Dict[str, Any]) -> Member:
        """Update the editable fields of a member (role, phone, dates)."""
        member = self._member(group_id, member_id)
        changes = {field: data[field] for field in EDITABLE_FIELDS if field in data}

        entry_date = changes.get("entry_date", member.entry_date)
        departure_date = changes.get("departure_date", member.departure_date)
        if entry_date is not None and departure_date is not None and departure_date < entry_date:
            raise ValidationError({"departure_date": [DEPARTURE_BEFORE_ENTRY]})

        for field, value in changes.items():
            setattr(member, field, value)
        self.commit()
        self.db.refresh(member)
        return member

    def delete(self, group_id: int, member_id: int) -> None:
        member = self._member(group_id, member_id)
        self.db.delete(member)
        self.commit()
        logger.info("Removed member %s from group %s", member_id, group_id)
