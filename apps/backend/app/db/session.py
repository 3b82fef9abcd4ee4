"""Database session management."""

from collections.abc import Generator

from sqlalchemy.orm import Session, sessionmaker

from app.core.config import get_settings
from polldesk.db.base import get_engine

settings = get_settings()

engine = get_engine(
    settings.database_url,
    echo=settings.environment == "development",
    pool_pre_ping=True,
)

session_factory = sessionmaker(
    engine,
    autoflush=False,
    expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
    """Dependency that yields a database session."""
    with session_factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
