"""Database seeding for GroupHub.

Creates the user types (one per role) and an initial administrator.
"""

import os
from typing import Dict

from sqlalchemy.orm import Session

from grouphub.core.rbac.roles import Role, DEFAULT_TYPE_USERS
from grouphub.core.security import get_password_hash
from grouphub.db.models import TypeUser, User


def seed_type_users(db: Session) -> Dict[Role, TypeUser]:
    """
    Create the 5 user types.

    Idempotent - existing rows are returned unchanged.

    Args:
        db: Database session

    Returns:
        Dict mapping Role to TypeUser row
    """
    type_users = {}

    for role, name in DEFAULT_TYPE_USERS.items():
        existing = db.get(TypeUser, role.value)
        if existing:
            type_users[role] = existing
            continue

        type_user = TypeUser(id=role.value, name=name)
        db.add(type_user)
        type_users[role] = type_user

    db.flush()
    return type_users


def seed_admin(
    db: Session,
    email: str,
    password: str,
    *,
    name: str = "Administrador",
) -> User:
    """
    Create the initial administrator account.

    Returns the existing user if the e-mail is already registered.
    """
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        return existing

    seed_type_users(db)
    admin = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        type_user_id=Role.ADMIN.value,
    )
    db.add(admin)
    db.flush()
    return admin


# CLI script for seeding
if __name__ == "__main__":
    import sys
    from grouphub.db.base import Base
    from grouphub.db.session import SessionLocal, engine

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        type_users = seed_type_users(db)
        print(f"Seeded {len(type_users)} user types:")
        for role, type_user in type_users.items():
            print(f"  - {role.value}: {type_user.name}")

        admin_email = os.environ.get("GROUPHUB_ADMIN_EMAIL")
        admin_password = os.environ.get("GROUPHUB_ADMIN_PASSWORD")
        if admin_email and admin_password:
            admin = seed_admin(db, admin_email, admin_password)
            print(f"\nAdministrator: {admin.email} (ID: {admin.id})")

        db.commit()
        print("\nSeeding complete!")

    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        db.close()
