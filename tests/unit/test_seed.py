"""Tests for database seeding."""

from grouphub.core.rbac import Role
from grouphub.core.security import verify_password
from grouphub.db.models import TypeUser, User
from grouphub.db.seed import seed_admin, seed_type_users


class TestSeed:

    def test_type_users_seeded_once(self, db_session):
        seed_type_users(db_session)
        type_users = seed_type_users(db_session)

        assert db_session.query(TypeUser).count() == 5
        assert type_users[Role.MANAGER].id == 2
        assert type_users[Role.MANAGER].name == "GERENTE"

    def test_seed_admin(self, db_session):
        admin = seed_admin(db_session, "admin@example.com", "changeme123")

        assert admin.type_user_id == Role.ADMIN.value
        assert verify_password("changeme123", admin.password_hash)
        assert seed_admin(db_session, "admin@example.com", "other-pass").id == admin.id
        assert db_session.query(User).count() == 1
