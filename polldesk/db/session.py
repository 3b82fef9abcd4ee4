"""Sessions for scripts and other code running outside the API."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session, sessionmaker

from polldesk.db.base import get_engine

SessionLocal = sessionmaker(bind=get_engine(), autoflush=False)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session whose work is committed on success and rolled back on error."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
