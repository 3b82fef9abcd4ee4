"""Database base and ORM models."""

from polldesk.db.base import Base, get_database_url, get_engine

__all__ = ["Base", "get_database_url", "get_engine"]
