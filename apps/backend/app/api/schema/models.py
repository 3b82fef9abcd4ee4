"""Pydantic models for schema discovery."""

from pydantic import BaseModel


class FieldInfo(BaseModel):
    """A single declared field; kind-specific attributes ride along as extras."""

    name: str
    kind: str
    is_required: bool

    model_config = {"extra": "allow"}


class ListInfo(BaseModel):
    """A declared list with its UI hints."""

    key: str
    description: str
    label_field: str
    initial_columns: list[str]
    is_hidden: bool
    fields: list[FieldInfo]


class SchemaResponse(BaseModel):
    """The whole schema declaration."""

    lists: list[ListInfo]
