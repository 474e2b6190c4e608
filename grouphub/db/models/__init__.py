"""Database models for GroupHub."""

from grouphub.db.models.type_user import TypeUser
from grouphub.db.models.user import User
from grouphub.db.models.group import Group, TypeGroup, Representative
from grouphub.db.models.member import Member

__all__ = [
    "TypeUser",
    "User",
    "Group",
    "TypeGroup",
    "Representative",
    "Member",
]
