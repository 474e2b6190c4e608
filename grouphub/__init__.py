"""GroupHub - role-based group and member management API."""

__version__ = "0.1.0"
