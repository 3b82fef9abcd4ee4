"""Generic content operations and list views over the declared lists."""

from .errors import (
    ContentError,
    ItemNotFoundError,
    UniqueConstraintError,
    UnknownListError,
    ValidationError,
)
from .list_view import ListView, ListViewPage
from .service import ContentService

__all__ = [
    "ContentError",
    "ContentService",
    "ItemNotFoundError",
    "ListView",
    "ListViewPage",
    "UniqueConstraintError",
    "UnknownListError",
    "ValidationError",
]
