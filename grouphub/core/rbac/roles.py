"""Role definitions for GroupHub.

Defines the 5 user roles. The integer value of each role is its
``type_user_id`` key as stored in the ``type_users`` table:

1. Admin - manages user accounts
2. Manager - creates and runs groups
3. Representative - external contact of a group
4. Member - participant of a group
5. Viewer - read-only account
"""

from enum import IntEnum
from typing import Dict, List


class Role(IntEnum):
    """User roles, keyed by ``type_user_id``."""

    ADMIN = 1
    MANAGER = 2
    REPRESENTATIVE = 3
    MEMBER = 4
    VIEWER = 5

    @classmethod
    def from_key(cls, key: int) -> "Role":
        """Resolve a ``type_user_id`` key. Raises ValueError for unknown keys."""
        try:
            return cls(int(key))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown role key: {key!r}")


# Display names seeded into the type_users table
DEFAULT_TYPE_USERS: Dict[Role, str] = {
    Role.ADMIN: "ADMINISTRADOR",
    Role.MANAGER: "GERENTE",
    Role.REPRESENTATIVE: "REPRESENTANTE",
    Role.MEMBER: "MEMBRO",
    Role.VIEWER: "VISUALIZADOR",
}


def role_of(principal) -> Role:
    """Return the role of a principal."""
    return principal.role


def role_keys() -> List[int]:
    """Currently enumerated role keys accepted for ``type_user_id``."""
    return [role.value for role in Role]
