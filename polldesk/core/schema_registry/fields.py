"""
Field library for PollDesk list declarations.

Each field kind is a frozen configuration struct. The structs carry no
behavior of their own beyond a few helpers; the registry validates them
and the content service enforces them.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# -----------------------------
# Enums
# -----------------------------


class FieldKind(str, Enum):
    """Supported field kinds."""

    TEXT = "text"
    PASSWORD = "password"
    TIMESTAMP = "timestamp"
    SELECT = "select"
    RELATIONSHIP = "relationship"
    VIRTUAL = "virtual"


class OnDelete(str, Enum):
    """What happens to related items when the owning item is deleted."""

    NULLIFY = "nullify"
    CASCADE = "cascade"


class RefError(ValueError):
    """Raised when a relationship reference is not of the form 'List.field'."""


def parse_ref(ref: str) -> tuple[str, str]:
    """Split a 'List.field' reference into its list key and field name."""
    parts = ref.split(".")
    if len(parts) != 2 or not all(parts):
        raise RefError(f"Malformed relationship reference '{ref}'")
    return parts[0], parts[1]


# -----------------------------
# Scalar Fields
# -----------------------------


@dataclass(frozen=True)
class TextField:
    """Plain text column."""

    is_required: bool = False
    is_unique: bool = False
    is_indexed: bool = False
    is_filterable: bool = False

    kind = FieldKind.TEXT
    is_immutable = False


@dataclass(frozen=True)
class PasswordField:
    """Password column; only a bcrypt hash is ever stored."""

    is_required: bool = False

    kind = FieldKind.PASSWORD
    is_filterable = False
    is_unique = False
    is_immutable = False


@dataclass(frozen=True)
class TimestampField:
    """Timezone-aware timestamp column."""

    is_required: bool = False
    default_now: bool = False  # fill with the creation time when omitted
    is_immutable: bool = False  # cannot be changed by updates
    is_filterable: bool = False

    kind = FieldKind.TIMESTAMP
    is_unique = False


@dataclass(frozen=True)
class SelectOption:
    """A single option of a select field."""

    label: str
    value: str


@dataclass(frozen=True)
class SelectField:
    """Single-select enumeration stored as its option value."""

    options: tuple[SelectOption, ...]
    default: str | None = None
    display_mode: str = "select"  # "select" | "segmented-control" | "radio"
    is_required: bool = False
    is_filterable: bool = False

    kind = FieldKind.SELECT
    is_unique = False
    is_immutable = False

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options)


# -----------------------------
# Relationships
# -----------------------------


@dataclass(frozen=True)
class RelationshipUI:
    """Admin presentation hints for a relationship field."""

    display_mode: str = "select"  # "select" | "cards" | "count"
    card_fields: tuple[str, ...] = ()
    link_to_item: bool = False
    inline_edit: tuple[str, ...] = ()
    inline_create: tuple[str, ...] = ()
    inline_connect: bool = False


@dataclass(frozen=True)
class RelationshipField:
    """
    Reference to another list.

    ``ref`` names the inverse field on the target list ("List.field"), so
    every relationship is declared once per side and validated as a pair.
    """

    ref: str
    many: bool = False
    is_required: bool = False
    on_delete: OnDelete = OnDelete.NULLIFY
    ui: RelationshipUI = field(default_factory=RelationshipUI)

    kind = FieldKind.RELATIONSHIP
    is_unique = False
    is_immutable = False

    @property
    def target_list(self) -> str:
        return parse_ref(self.ref)[0]

    @property
    def target_field(self) -> str:
        return parse_ref(self.ref)[1]


# -----------------------------
# Virtual Fields
# -----------------------------


@dataclass(frozen=True)
class VirtualField:
    """A computed, non-stored field resolved from the item itself."""

    resolve: Callable[[Any], Any]
    description: str = ""

    kind = FieldKind.VIRTUAL
    is_required = False
    is_unique = False
    is_immutable = False
    is_filterable = False


ScalarField = TextField | PasswordField | TimestampField | SelectField
Field = ScalarField | RelationshipField | VirtualField


# -----------------------------
# List Schema
# -----------------------------


@dataclass(frozen=True)
class ListUI:
    """Admin presentation hints for a whole list."""

    label_field: str | None = None  # defaults to "name" if present, else "id"
    initial_columns: tuple[str, ...] = ()  # defaults to (label_field,)
    is_hidden: bool = False


@dataclass(frozen=True)
class ListSchema:
    """Declaration of a single list: its fields and UI hints."""

    key: str
    fields: dict[str, Field]
    ui: ListUI = field(default_factory=ListUI)
    description: str = ""
