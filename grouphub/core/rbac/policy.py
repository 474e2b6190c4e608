"""Policy evaluator for GroupHub.

Decides whether a principal may perform an action on a resource. Every
(resource, action) pair without an explicit rule is denied. A denial always
carries the same opaque message so callers cannot learn which check failed.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol, Tuple

from grouphub.core.exceptions import AuthorizationError, UNAUTHORIZED_MESSAGE
from grouphub.core.logger import get_logger

from .permissions import (
    Action,
    Resource,
    GROUP_EDITORS,
    GROUP_VIEWERS,
    MEMBER_EDITORS,
    USER_MANAGERS,
    USER_SELF_EDITORS,
    USER_VIEWERS,
)
from .principal import Principal
from .roles import Role, role_of

logger = get_logger(__name__)


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy evaluation."""

    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)
DENY = Decision(False, UNAUTHORIZED_MESSAGE)


class OwnershipLookup(Protocol):
    """Resolves group ownership for policy checks.

    Both methods raise ``NotFoundError`` when the group does not exist.
    """

    def creator_of(self, group_id: int) -> int:
        ...

    def representative_user_of(self, group_id: int) -> Optional[int]:
        ...


Rule = Callable[[Principal, Optional[int]], bool]


class PolicyEvaluator:
    """Evaluates (principal, action, resource) triples against the rule table."""

    def __init__(self, ownership: Optional[OwnershipLookup] = None):
        self.ownership = ownership
        self._rules: Dict[Tuple[Resource, Action], Rule] = {
            (Resource.USERS, Action.VIEW): self._can_view_users,
            (Resource.USERS, Action.CREATE): self._can_manage_users,
            (Resource.USERS, Action.UPDATE): self._can_update_user,
            (Resource.USERS, Action.DELETE): self._can_manage_users,
            (Resource.USERS, Action.RESTORE): self._can_manage_users,
            (Resource.GROUPS, Action.VIEW): self._can_view_groups,
            (Resource.GROUPS, Action.CREATE): self._can_create_group,
            (Resource.GROUPS, Action.UPDATE): self._can_change_group,
            (Resource.GROUPS, Action.DELETE): self._can_change_group,
            (Resource.MEMBERS, Action.VIEW): self._can_manage_members,
            (Resource.MEMBERS, Action.CREATE): self._can_manage_members,
            (Resource.MEMBERS, Action.UPDATE): self._can_manage_members,
            (Resource.MEMBERS, Action.DELETE): self._can_manage_members,
        }

    def authorize(
        self,
        principal: Principal,
        action: Action,
        resource: Resource,
        resource_id: Optional[int] = None,
    ) -> Decision:
        """Return ALLOW or DENY for the given request.

        Raises:
            NotFoundError: if an ownership check targets a group that does not exist
        """
        rule = self._rules.get((resource, action))
        if rule is None or not rule(principal, resource_id):
            logger.info(
                "Denied %s on %s (id=%s) for user %s",
                action.value, resource.value, resource_id, principal.id,
            )
            return DENY
        return ALLOW

    def enforce(
        self,
        principal: Principal,
        action: Action,
        resource: Resource,
        resource_id: Optional[int] = None,
    ) -> None:
        """Raise AuthorizationError unless the action is allowed."""
        decision = self.authorize(principal, action, resource, resource_id)
        if not decision:
            raise AuthorizationError(decision.reason)

    # Users

    def _can_view_users(self, principal: Principal, resource_id: Optional[int]) -> bool:
        return role_of(principal) in USER_VIEWERS

    def _can_manage_users(self, principal: Principal, resource_id: Optional[int]) -> bool:
        return role_of(principal) in USER_MANAGERS

    def _can_update_user(self, principal: Principal, resource_id: Optional[int]) -> bool:
        if role_of(principal) not in USER_SELF_EDITORS:
            return False
        return resource_id is not None and principal.id == resource_id

    # Groups

    def _can_view_groups(self, principal: Principal, resource_id: Optional[int]) -> bool:
        return role_of(principal) in GROUP_VIEWERS

    def _can_create_group(self, principal: Principal, resource_id: Optional[int]) -> bool:
        return role_of(principal) in GROUP_EDITORS

    def _can_change_group(self, principal: Principal, resource_id: Optional[int]) -> bool:
        if role_of(principal) not in GROUP_EDITORS:
            return False
        return self._is_creator_of_group(principal, resource_id)

    # Members

    def _can_manage_members(self, principal: Principal, resource_id: Optional[int]) -> bool:
        role = role_of(principal)
        if role not in MEMBER_EDITORS:
            return False
        if role == Role.MANAGER:
            return self._is_creator_of_group(principal, resource_id)
        return self._is_representative_of_group(principal, resource_id)

    # Ownership

    def _is_creator_of_group(self, principal: Principal, group_id: Optional[int]) -> bool:
        if group_id is None or self.ownership is None:
            return False
        return self.ownership.creator_of(group_id) == principal.id

    def _is_representative_of_group(self, principal: Principal, group_id: Optional[int]) -> bool:
        if group_id is None or self.ownership is None:
            return False
        representative_id = self.ownership.representative_user_of(group_id)
        return representative_id is not None and representative_id == principal.id
