"""
Base repository providing scoped session handling.
"""

from contextlib import contextmanager
from typing import Generic, Iterator, Optional, Type, TypeVar
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from database import SessionLocal, session_scope
from exceptions import DatabaseError
from .specifications import Specification

T = TypeVar('T')

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Generic base repository.

    Repositories hold no session of their own. Every operation opens one
    through _session(), which commits on success, rolls back on failure and
    always closes the session. Store failures leave as DatabaseError.
    """

    def __init__(self, model: Type[T], session_factory: Optional[sessionmaker] = None):
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class
            session_factory: Factory for scoped sessions (defaults to SessionLocal)
        """
        self.model = model
        self.session_factory = session_factory or SessionLocal

    @contextmanager
    def _session(self, operation: str, key: Optional[tuple] = None) -> Iterator[Session]:
        """
        Open a session for one operation.

        Args:
            operation: Operation name, reported in DatabaseError details
            key: Record key being worked on, if any

        Raises:
            DatabaseError: If the store raises a SQLAlchemy error
        """
        try:
            with session_scope(self.session_factory) as db:
                yield db
        except SQLAlchemyError as e:
            logger.error(f"{operation} failed for {self.model.__name__} {key}: {e}", exc_info=True)
            raise DatabaseError(
                operation,
                f"Database operation '{operation}' failed: {e}",
                key=key,
            ) from e

    def count(self, spec: Optional[Specification[T]] = None) -> int:
        """
        Count records, optionally restricted by a specification.

        Args:
            spec: Specification to match records against

        Returns:
            Number of matching records
        """
        with self._session("count") as db:
            query = db.query(self.model)
            if spec is not None:
                query = query.filter(spec.to_sql_filter())
            return query.count()
