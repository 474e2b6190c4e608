"""User account service."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from grouphub.core.exceptions import NotFoundError
from grouphub.core.logger import get_logger
from grouphub.core.security import get_password_hash
from grouphub.db.models import User

from .base import BaseService

logger = get_logger(__name__)


class UserService(BaseService):
    """CRUD and soft-delete/restore for user accounts."""

    def list(
        self,
        *,
        email: Optional[str] = None,
        type_user_id: Optional[int] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Tuple[List[User], int]:
        """List active users with their type, optionally filtered."""
        query = (
            self.db.query(User)
            .options(joinedload(User.type_user))
            .filter(User.deleted_at.is_(None))
        )
        if email:
            query = query.filter(func.lower(User.email) == email.lower())
        if type_user_id is not None:
            query = query.filter(User.type_user_id == type_user_id)

        return self.paginate(query.order_by(User.id), page, per_page)

    def get(self, user_id: int) -> User:
        """Get an active user. Raises NotFoundError for missing or deleted users."""
        user = (
            self.db.query(User)
            .options(joinedload(User.type_user))
            .filter(User.id == user_id, User.deleted_at.is_(None))
            .first()
        )
        if user is None:
            raise NotFoundError("Usuário")
        return user

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """Check e-mail uniqueness across all users, deleted ones included."""
        query = self.db.query(User.id).filter(func.lower(User.email) == email.lower())
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def create(self, data: Dict[str, Any]) -> User:
        data = dict(data)
        password = data.pop("password", None)
        user = User(**data)
        if password:
            user.password_hash = get_password_hash(password)
        self.db.add(user)
        self.commit()
        self.db.refresh(user)
        logger.info("Created user %s with type %s", user.id, user.type_user_id)
        return user

    def update(self, user_id: int, data: Dict[str, Any]) -> User:
        user = self.get(user_id)
        data = dict(data)
        password = data.pop("password", None)
        for field, value in data.items():
            setattr(user, field, value)
        if password:
            user.password_hash = get_password_hash(password)
        self.commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        """Soft-delete a user."""
        user = self.get(user_id)
        user.deleted_at = datetime.utcnow()
        self.commit()
        logger.info("Deleted user %s", user_id)

    def restore(self, user_id: int) -> User:
        """Undo a soft delete. Restoring an active user is a no-op."""
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("Usuário")
        if user.is_deleted:
            user.deleted_at = None
            self.commit()
            self.db.refresh(user)
            logger.info("Restored user %s", user_id)
        return user

    def find_active_by_email(self, email: str) -> Optional[User]:
        """Look up a registered (non-deleted) user by e-mail."""
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.lower(), User.deleted_at.is_(None))
            .first()
        )
