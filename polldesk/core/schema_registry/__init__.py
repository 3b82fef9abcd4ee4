"""Schema Registry for PollDesk - declares lists, fields and relationships."""

from .fields import (
    FieldKind,
    ListSchema,
    ListUI,
    OnDelete,
    PasswordField,
    RelationshipField,
    RelationshipUI,
    SelectField,
    SelectOption,
    TextField,
    TimestampField,
    VirtualField,
    parse_ref,
)
from .lists import LISTS
from .registry import SchemaError, SchemaRegistry, get_default_registry

__all__ = [
    "FieldKind",
    "LISTS",
    "ListSchema",
    "ListUI",
    "OnDelete",
    "PasswordField",
    "RelationshipField",
    "RelationshipUI",
    "SchemaError",
    "SchemaRegistry",
    "SelectField",
    "SelectOption",
    "TextField",
    "TimestampField",
    "VirtualField",
    "get_default_registry",
    "parse_ref",
]
