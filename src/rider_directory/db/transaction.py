"""Transaction utilities for explicit transaction boundaries.

This module provides a context manager for managing database transactions
with automatic commit/rollback semantics so that a failed mutation never
leaves partial state behind (and never reaches the notification bus).
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def transaction(session: Session) -> Generator[Session]:
    """Context manager for explicit transaction boundaries.

    Commits on successful completion, rolls back on any exception.

    Example:
        with transaction(session):
            session.add(rider)
        # Automatic commit if no exception, rollback otherwise

    Args:
        session: SQLAlchemy session to manage

    Yields:
        The same session for use within the context

    Raises:
        Any exception raised within the context (after rollback)
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
