"""
Schema Registry for PollDesk.

This module:
- Loads the list declarations once
- Validates that they are internally consistent (every relationship has a
  matching inverse, UI hints point at real fields, select defaults are
  valid options, delete policies are coherent)
- Answers lookups for the content service, the list view and the API

The registry is the SINGLE source of truth for the data model.
"""

from functools import lru_cache
from typing import Any

from polldesk.core.schema_registry.fields import (
    Field,
    FieldKind,
    ListSchema,
    OnDelete,
    PasswordField,
    RefError,
    RelationshipField,
    SelectField,
    VirtualField,
    parse_ref,
)
from polldesk.core.schema_registry.lists import LISTS


# -----------------------------
# Errors
# -----------------------------


class SchemaError(Exception):
    """Raised when a declaration is malformed or internally inconsistent."""

    pass


# -----------------------------
# Schema Registry Class
# -----------------------------


class SchemaRegistry:
    """
    Central registry for list declarations.

    Validation happens in the constructor, so holding a registry means
    holding a consistent schema.
    """

    def __init__(self, lists: dict[str, ListSchema]):
        self._lists = dict(lists)

        for key, schema in self._lists.items():
            if key != schema.key:
                raise SchemaError(
                    f"List registered as '{key}' declares key '{schema.key}'"
                )

        self._validate_relationships()
        self._validate_select_fields()

        # Resolve UI defaults once
        self._label_fields: dict[str, str] = {}
        self._initial_columns: dict[str, tuple[str, ...]] = {}
        for key, schema in self._lists.items():
            label_field = schema.ui.label_field or (
                "name" if "name" in schema.fields else "id"
            )
            self._label_fields[key] = label_field
            self._initial_columns[key] = schema.ui.initial_columns or (label_field,)

        self._validate_ui()

    # -------------------------
    # Validation Methods
    # -------------------------

    def _validate_relationships(self) -> None:
        """Check every relationship against its declared inverse."""
        # Refs are parsed up front so inverse lookups below can rely on them
        for list_key, schema in self._lists.items():
            for field_name, config in schema.fields.items():
                if isinstance(config, RelationshipField):
                    try:
                        parse_ref(config.ref)
                    except RefError as e:
                        raise SchemaError(f"{list_key}.{field_name}: {e}") from e

        for list_key, schema in self._lists.items():
            for field_name, config in schema.fields.items():
                if not isinstance(config, RelationshipField):
                    continue
                where = f"{list_key}.{field_name}"
                target_list, target_field = parse_ref(config.ref)

                target = self._lists.get(target_list)
                if target is None:
                    raise SchemaError(
                        f"{where}: references unknown list '{target_list}'"
                    )

                inverse = target.fields.get(target_field)
                if inverse is None:
                    raise SchemaError(
                        f"{where}: inverse field '{config.ref}' does not exist"
                    )
                if not isinstance(inverse, RelationshipField):
                    raise SchemaError(
                        f"{where}: inverse field '{config.ref}' is not a relationship"
                    )
                if parse_ref(inverse.ref) != (list_key, field_name):
                    raise SchemaError(
                        f"{where}: inverse '{config.ref}' points to '{inverse.ref}'"
                    )

                if config.is_required and config.many:
                    raise SchemaError(f"{where}: only single relationships can be required")
                if config.on_delete == OnDelete.CASCADE and (not config.many or inverse.many):
                    raise SchemaError(
                        f"{where}: cascade is only allowed on the many side "
                        "of a one-to-many relationship"
                    )
                if config.is_required and inverse.on_delete != OnDelete.CASCADE:
                    raise SchemaError(
                        f"{where}: required relationship needs '{config.ref}' "
                        "to cascade on delete"
                    )

                for card_field in config.ui.card_fields:
                    if card_field not in target.fields:
                        raise SchemaError(
                            f"{where}: card field '{card_field}' is not on '{target_list}'"
                        )
                    if isinstance(target.fields[card_field], PasswordField):
                        raise SchemaError(
                            f"{where}: password field '{card_field}' cannot be a card field"
                        )

    def _validate_select_fields(self) -> None:
        """Check select options and defaults."""
        for list_key, schema in self._lists.items():
            for field_name, config in schema.fields.items():
                if not isinstance(config, SelectField):
                    continue
                where = f"{list_key}.{field_name}"
                values = config.values
                if not values:
                    raise SchemaError(f"{where}: select field has no options")
                if len(set(values)) != len(values):
                    raise SchemaError(f"{where}: duplicate option values")
                if config.default is not None and config.default not in values:
                    raise SchemaError(
                        f"{where}: default '{config.default}' is not one of {list(values)}"
                    )

    def _validate_ui(self) -> None:
        """Check label fields and list-view columns."""
        for list_key, schema in self._lists.items():
            label_field = self._label_fields[list_key]
            if label_field != "id":
                config = schema.fields.get(label_field)
                if config is None:
                    raise SchemaError(
                        f"{list_key}: label field '{label_field}' does not exist"
                    )
                if isinstance(config, PasswordField) or (
                    isinstance(config, RelationshipField) and config.many
                ):
                    raise SchemaError(
                        f"{list_key}: '{label_field}' cannot be used as a label field"
                    )

            for column in self._initial_columns[list_key]:
                if column == "id":
                    continue
                config = schema.fields.get(column)
                if config is None:
                    raise SchemaError(
                        f"{list_key}: list-view column '{column}' does not exist"
                    )
                if isinstance(config, PasswordField):
                    raise SchemaError(
                        f"{list_key}: password field '{column}' cannot be a column"
                    )

    # -------------------------
    # Lookup Methods
    # -------------------------

    def get_list(self, list_key: str) -> ListSchema | None:
        """Get a list declaration by key."""
        return self._lists.get(list_key)

    def list_keys(self) -> list[str]:
        """List all declared list keys."""
        return list(self._lists.keys())

    def navigation(self) -> list[str]:
        """List keys shown in admin navigation (hidden lists excluded)."""
        return [key for key, schema in self._lists.items() if not schema.ui.is_hidden]

    def get_field(self, list_key: str, field_name: str) -> Field | None:
        """Get a field declaration, or None if the list or field is unknown."""
        schema = self._lists.get(list_key)
        return schema.fields.get(field_name) if schema else None

    def scalar_fields(self, list_key: str) -> dict[str, Field]:
        """Stored, non-relationship fields of a list."""
        return {
            name: config
            for name, config in self._lists[list_key].fields.items()
            if config.kind not in (FieldKind.RELATIONSHIP, FieldKind.VIRTUAL)
        }

    def relationship_fields(self, list_key: str) -> dict[str, RelationshipField]:
        """Relationship fields of a list."""
        return {
            name: config
            for name, config in self._lists[list_key].fields.items()
            if isinstance(config, RelationshipField)
        }

    def virtual_fields(self, list_key: str) -> dict[str, VirtualField]:
        """Computed fields of a list."""
        return {
            name: config
            for name, config in self._lists[list_key].fields.items()
            if isinstance(config, VirtualField)
        }

    def get_inverse(self, list_key: str, field_name: str) -> RelationshipField | None:
        """Get the inverse side of a relationship field."""
        config = self.get_field(list_key, field_name)
        if not isinstance(config, RelationshipField):
            return None
        target = self._lists[config.target_list]
        return target.fields[config.target_field]

    def label_field(self, list_key: str) -> str:
        """Field used to label items of a list."""
        return self._label_fields[list_key]

    def initial_columns(self, list_key: str) -> tuple[str, ...]:
        """Columns shown by default in the list view."""
        return self._initial_columns[list_key]

    # -------------------------
    # Serialization
    # -------------------------

    def to_dict(self) -> dict[str, Any]:
        """Describe the whole schema as plain JSON-friendly data."""
        lists = []
        for list_key, schema in self._lists.items():
            fields = []
            for field_name, config in schema.fields.items():
                field_info: dict[str, Any] = {
                    "name": field_name,
                    "kind": config.kind.value,
                    "is_required": config.is_required,
                }
                if isinstance(config, RelationshipField):
                    field_info.update(
                        ref=config.ref,
                        many=config.many,
                        on_delete=config.on_delete.value,
                        display_mode=config.ui.display_mode,
                    )
                    if config.ui.card_fields:
                        field_info["card_fields"] = list(config.ui.card_fields)
                        field_info["link_to_item"] = config.ui.link_to_item
                elif isinstance(config, SelectField):
                    field_info.update(
                        options=[
                            {"label": option.label, "value": option.value}
                            for option in config.options
                        ],
                        default=config.default,
                        display_mode=config.display_mode,
                    )
                elif isinstance(config, VirtualField):
                    field_info["description"] = config.description
                else:
                    field_info["is_unique"] = config.is_unique
                    field_info["is_filterable"] = config.is_filterable
                fields.append(field_info)

            lists.append({
                "key": list_key,
                "description": schema.description,
                "label_field": self._label_fields[list_key],
                "initial_columns": list(self._initial_columns[list_key]),
                "is_hidden": schema.ui.is_hidden,
                "fields": fields,
            })

        return {"lists": lists}


# -----------------------------
# Default Registry
# -----------------------------


@lru_cache
def get_default_registry() -> SchemaRegistry:
    """Get the default schema registry, built once per process."""
    return SchemaRegistry(lists=LISTS)
