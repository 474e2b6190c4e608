"""API routers for GroupHub."""

from . import auth
from . import users
from . import groups
from . import members
from . import health

__all__ = [
    "auth",
    "users",
    "groups",
    "members",
    "health",
]
