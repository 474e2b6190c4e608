"""RBAC (Role-Based Access Control) module for GroupHub.

This module defines the role model, the protected resources and actions,
and the policy evaluator that decides who may act on what.
"""

from .roles import Role, role_of, role_keys, DEFAULT_TYPE_USERS
from .permissions import Resource, Action
from .principal import Principal
from .policy import PolicyEvaluator, OwnershipLookup, Decision, ALLOW, DENY

__all__ = [
    "Role",
    "role_of",
    "role_keys",
    "DEFAULT_TYPE_USERS",
    "Resource",
    "Action",
    "Principal",
    "PolicyEvaluator",
    "OwnershipLookup",
    "Decision",
    "ALLOW",
    "DENY",
]
