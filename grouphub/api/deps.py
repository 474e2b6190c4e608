from typing import Generator

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from grouphub.core.exceptions import AuthenticationError
from grouphub.core.rbac import PolicyEvaluator, Principal
from grouphub.core.security import decode_token
from grouphub.db.models import User
from grouphub.db.session import SessionLocal
from grouphub.services import GroupOwnershipLookup, RegistrationNotifier

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_db() -> Generator:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> User:
    """Get the authenticated, non-deleted user from the bearer token."""
    if token:
        user_id = decode_token(token)
        if user_id is not None:
            user = db.query(User).filter(
                User.id == user_id,
                User.deleted_at.is_(None),
            ).first()
            if user:
                request.state.user = user
                return user

    raise AuthenticationError()


def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    """Resolve the request principal once per request."""
    try:
        return Principal.from_user(current_user)
    except ValueError:
        # A user whose type is not an enumerated role cannot act
        raise AuthenticationError()


def get_policy(db: Session = Depends(get_db)) -> PolicyEvaluator:
    """Policy evaluator wired to database ownership lookups."""
    return PolicyEvaluator(GroupOwnershipLookup(db))


def get_notifier() -> RegistrationNotifier:
    return RegistrationNotifier()
