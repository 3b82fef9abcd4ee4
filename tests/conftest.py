"""Shared fixtures: an in-memory database and a content service."""

import os

# Must be set before any app module reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from polldesk.core.content import ContentService
from polldesk.db.base import Base, get_engine
from polldesk.db.models import MODELS  # noqa: F401


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database with every table created."""
    engine = get_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory) -> Session:
    with session_factory() as session:
        yield session


@pytest.fixture
def service(session: Session) -> ContentService:
    """Content service over the default registry."""
    return ContentService(session)
