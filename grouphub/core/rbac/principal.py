"""The authenticated actor passed explicitly to policies and validators."""

from dataclasses import dataclass

from .roles import Role


@dataclass(frozen=True)
class Principal:
    id: int
    role: Role
    email: str = ""
    name: str = ""

    @classmethod
    def from_user(cls, user) -> "Principal":
        """Build a principal from a ``User`` row. Raises ValueError on unknown roles."""
        return cls(
            id=user.id,
            role=Role.from_key(user.type_user_id),
            email=user.email or "",
            name=user.name or "",
        )
