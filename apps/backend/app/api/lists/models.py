"""Pydantic models for list views."""

from typing import Any

from pydantic import BaseModel


class NavigationItem(BaseModel):
    """A list shown in admin navigation."""

    key: str
    label_field: str
    initial_columns: list[str]


class NavigationResponse(BaseModel):
    """Lists shown in admin navigation."""

    lists: list[NavigationItem]


class ListViewResponse(BaseModel):
    """A rendered list view."""

    list_key: str
    columns: list[str]
    rows: list[dict[str, Any]]


class CardsResponse(BaseModel):
    """A relationship rendered as cards."""

    list_key: str
    item_id: str
    field: str
    cards: list[dict[str, Any]]
