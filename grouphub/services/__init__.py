"""Service layer for GroupHub."""

from grouphub.services.notifications import RegistrationNotifier
from grouphub.services.ownership import GroupOwnershipLookup
from grouphub.services.users import UserService
from grouphub.services.groups import GroupService
from grouphub.services.members import MemberService

__all__ = [
    "RegistrationNotifier",
    "GroupOwnershipLookup",
    "UserService",
    "GroupService",
    "MemberService",
]
