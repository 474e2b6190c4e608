"""Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite database with the user types
seeded. Factory fixtures commit what they create so that rollbacks performed
by the code under test never discard fixture data.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from grouphub.api.deps import get_db, get_notifier
from grouphub.api.main import app
from grouphub.core.security import create_access_token
from grouphub.db.base import Base
from grouphub.db.seed import seed_type_users
from grouphub.services.notifications import RegistrationNotifier

from tests import factories


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Database session with the user types seeded."""
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    seed_type_users(session)
    session.commit()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    """Registration notifier that records calls instead of sending e-mail."""
    return MagicMock(spec=RegistrationNotifier)


@pytest.fixture
def client(db_session, notifier):
    """Test client wired to the per-test database and mock notifier."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_factory(db_session):
    def make(**kwargs):
        user = factories.create_user(db_session, **kwargs)
        db_session.commit()
        return user
    return make


@pytest.fixture
def group_factory(db_session):
    def make(**kwargs):
        group = factories.create_group(db_session, **kwargs)
        db_session.commit()
        return group
    return make


@pytest.fixture
def member_factory(db_session):
    def make(**kwargs):
        member = factories.create_member(db_session, **kwargs)
        db_session.commit()
        return member
    return make


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user."""

    def make(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return make
