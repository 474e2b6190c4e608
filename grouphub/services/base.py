"""Shared service plumbing: session handling and transaction boundaries."""

from typing import Any, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from grouphub.core.exceptions import PersistenceError
from grouphub.core.logger import get_logger

logger = get_logger(__name__)


class BaseService:
    """Base class for services operating on a database session."""

    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        """Commit the current transaction, rolling back on storage errors."""
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Transaction failed in %s", type(self).__name__)
            raise PersistenceError() from exc

    @staticmethod
    def paginate(query: Query, page: int, per_page: int) -> Tuple[List[Any], int]:
        """Return one page of results and the total row count."""
        total = query.count()
        items = query.offset((page - 1) * per_page).limit(per_page).all()
        return items, total
