"""
List view rendering for PollDesk.

Turns ORM items into the rows and relationship cards the admin UI shows,
driven entirely by the UI hints in the schema declaration.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from polldesk.core.content.errors import ValidationError
from polldesk.core.schema_registry import (
    PasswordField,
    RelationshipField,
    SchemaRegistry,
    SelectField,
    VirtualField,
    get_default_registry,
)


@dataclass(frozen=True)
class ListViewPage:
    """A rendered list view: the visible columns and one row per item."""

    list_key: str
    columns: tuple[str, ...]
    rows: tuple[dict[str, Any], ...]

    def values(self) -> list[list[Any]]:
        """Row cells in column order, without the item ids."""
        return [[row[column] for column in self.columns] for row in self.rows]


class ListView:
    """Renders items of any declared list according to its UI hints."""

    def __init__(self, registry: SchemaRegistry | None = None):
        self._registry = registry or get_default_registry()

    def render(
        self,
        list_key: str,
        items: list[Any],
        columns: tuple[str, ...] | None = None,
    ) -> ListViewPage:
        """
        Render items as a list view page.

        Args:
            list_key: Declared list the items belong to.
            items: ORM instances of that list.
            columns: Columns to show. Defaults to the list's initial columns.

        Returns:
            ListViewPage whose rows always carry the item id.
        """
        columns = columns or self._registry.initial_columns(list_key)
        rows = []
        for item in items:
            row = {"id": str(item.id)}
            for column in columns:
                row[column] = self.cell(item, list_key, column)
            rows.append(row)
        return ListViewPage(list_key=list_key, columns=tuple(columns), rows=tuple(rows))

    def label(self, item: Any, list_key: str) -> Any:
        """Label of an item, as shown wherever it is referenced."""
        label_field = self._registry.label_field(list_key)
        if label_field == "id":
            return str(item.id)
        return self.cell(item, list_key, label_field)

    def cell(self, item: Any, list_key: str, field_name: str) -> Any:
        """
        Render a single field of an item.

        Raises:
            ValidationError: If the field is a password.
        """
        if field_name == "id":
            return str(item.id)

        config = self._registry.get_field(list_key, field_name)
        if isinstance(config, PasswordField):
            raise ValidationError(list_key, field_name, "is a password and cannot be shown")
        if isinstance(config, VirtualField):
            return config.resolve(item)

        value = getattr(item, field_name)
        if isinstance(config, RelationshipField):
            if config.many:
                return [self.label(related, config.target_list) for related in value]
            return None if value is None else self.label(value, config.target_list)
        if isinstance(config, SelectField) and value is not None:
            return getattr(value, "value", value)
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    def cards(self, item: Any, list_key: str, field_name: str) -> list[dict[str, Any]]:
        """
        Render a relationship displayed as cards.

        Raises:
            ValidationError: If the field is not a relationship shown as cards.
        """
        config = self._registry.get_field(list_key, field_name)
        if not isinstance(config, RelationshipField) or config.ui.display_mode != "cards":
            raise ValidationError(list_key, field_name, "is not displayed as cards")

        related = getattr(item, field_name)
        if not config.many:
            related = [] if related is None else [related]

        cards = []
        for target in related:
            card = {
                card_field: self.cell(target, config.target_list, card_field)
                for card_field in config.ui.card_fields
            }
            if config.ui.link_to_item:
                card["id"] = str(target.id)
            cards.append(card)
        return cards
