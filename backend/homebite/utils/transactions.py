from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """
    Run the block as one unit of work on the given Session.

    Commits when the block finishes, rolls back and re-raises when it raises,
    so a service never leaves half of a multi-row change behind.
    Usage:
        with transaction(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
