"""Resources, actions and role gates for GroupHub policies.

A role gate answers "may this role reach the action at all?". Ownership
checks (group creator, group representative) are layered on top of the gate
by the policy evaluator.
"""

from enum import Enum
from typing import FrozenSet

from .roles import Role


class Resource(str, Enum):
    """Resource types that can be protected by policies."""

    USERS = "users"
    GROUPS = "groups"
    MEMBERS = "members"   # resource id is the owning group id


class Action(str, Enum):
    """Actions that can be performed on resources."""

    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"


USER_VIEWERS: FrozenSet[Role] = frozenset({Role.ADMIN, Role.MANAGER, Role.REPRESENTATIVE})
# Self-service update is reachable by every role; identity decides the rest.
USER_SELF_EDITORS: FrozenSet[Role] = frozenset(Role)
USER_MANAGERS: FrozenSet[Role] = frozenset({Role.ADMIN})

GROUP_VIEWERS: FrozenSet[Role] = frozenset({Role.ADMIN, Role.MANAGER, Role.REPRESENTATIVE})
GROUP_EDITORS: FrozenSet[Role] = frozenset({Role.MANAGER})

MEMBER_EDITORS: FrozenSet[Role] = frozenset({Role.MANAGER, Role.REPRESENTATIVE})
