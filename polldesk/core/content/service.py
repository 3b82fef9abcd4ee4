"""
Content service for PollDesk.

A generic create / read / update / delete / list engine that works for any
declared list. Everything it enforces comes from the schema declaration:
required fields, uniqueness, select options, defaults, immutability,
password hashing and relationship resolution.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from polldesk.core.content.errors import (
    ContentError,
    ItemNotFoundError,
    UniqueConstraintError,
    UnknownListError,
    ValidationError,
)
from polldesk.core.content.list_view import ListView, ListViewPage
from polldesk.core.schema_registry import (
    ListSchema,
    PasswordField,
    RelationshipField,
    SchemaRegistry,
    SelectField,
    TimestampField,
    VirtualField,
    get_default_registry,
)
from polldesk.core.security import MAX_PASSWORD_BYTES, hash_password, password_fits
from polldesk.db.models import MODELS

logger = logging.getLogger(__name__)


class ContentService:
    """
    Performs content operations against the database for declared lists.

    The service flushes but never commits; the caller owns the transaction.
    """

    def __init__(
        self,
        session: Session,
        registry: SchemaRegistry | None = None,
        models: dict[str, type] | None = None,
    ):
        self._session = session
        self._registry = registry or get_default_registry()
        self._models = models or MODELS
        self._list_view = ListView(self._registry)

    # -------------------------
    # Read Operations
    # -------------------------

    def get(self, list_key: str, item_id: UUID | str) -> Any:
        """
        Fetch a single item.

        Raises:
            UnknownListError: If the list is not declared.
            ItemNotFoundError: If no such item exists.
        """
        self._schema(list_key)
        item = self._session.get(self._models[list_key], self._coerce_id(list_key, item_id))
        if item is None:
            raise ItemNotFoundError(list_key, item_id)
        return item

    def list_items(self, list_key: str, where: dict[str, Any] | None = None) -> list[Any]:
        """
        List items, optionally filtered.

        Args:
            list_key: Declared list to read.
            where: Field/value equality filters. Only filterable scalar
                fields and single relationships (by related id) are allowed.

        Raises:
            ValidationError: If a filter names a field that cannot be filtered.
        """
        schema = self._schema(list_key)
        model = self._models[list_key]
        scalar_fields = self._registry.scalar_fields(list_key)
        stmt = select(model)

        for field_name, value in (where or {}).items():
            config = schema.fields.get(field_name)
            if isinstance(config, RelationshipField) and not config.many:
                column = getattr(model, field_name)
                if value is None:
                    stmt = stmt.where(column == None)  # noqa: E711
                else:
                    stmt = stmt.where(column == self.get(config.target_list, value))
            elif field_name in scalar_fields and config.is_filterable:
                value = self._clean_scalar(list_key, field_name, config, value)
                stmt = stmt.where(getattr(model, field_name) == value)
            else:
                raise ValidationError(list_key, field_name, "is not filterable")

        label_field = self._registry.label_field(list_key)
        if label_field in scalar_fields:
            stmt = stmt.order_by(getattr(model, label_field))

        return list(self._session.scalars(stmt))

    def list_view(self, list_key: str, where: dict[str, Any] | None = None) -> ListViewPage:
        """List items rendered with the list's initial columns."""
        return self._list_view.render(list_key, self.list_items(list_key, where))

    def cards(self, list_key: str, item_id: UUID | str, field_name: str) -> list[dict[str, Any]]:
        """Render a relationship of an item as cards."""
        return self._list_view.cards(self.get(list_key, item_id), list_key, field_name)

    # -------------------------
    # Write Operations
    # -------------------------

    def create(self, list_key: str, data: dict[str, Any]) -> Any:
        """
        Create an item.

        Args:
            list_key: Declared list to create in.
            data: Field values. Relationships take related ids (a list of ids
                for many relationships).

        Returns:
            The flushed ORM instance.

        Raises:
            ValidationError: If any value breaks the declaration.
            UniqueConstraintError: If a unique value is already used.
            ItemNotFoundError: If a related id does not exist.
            ContentError: If the database refuses the write.
        """
        schema = self._schema(list_key)
        self._reject_unknown_fields(list_key, schema, data)

        values: dict[str, Any] = {}
        for field_name, config in self._registry.scalar_fields(list_key).items():
            value = data.get(field_name)
            if value is not None:
                value = self._clean_scalar(list_key, field_name, config, value)
            if value is None:
                value = self._default(config)
            if config.is_required and (value is None or value == ""):
                self._reject(list_key, field_name, "is required")
            if value is None:
                continue
            if config.is_unique:
                self._check_unique(list_key, field_name, value)
            if isinstance(config, PasswordField):
                value = hash_password(value)
            values[field_name] = value

        for field_name, config in self._registry.relationship_fields(list_key).items():
            if field_name in data:
                values[field_name] = self._resolve_related(
                    list_key, field_name, config, data[field_name]
                )
            elif config.is_required:
                self._reject(list_key, field_name, "is required")

        with self._writing(list_key):
            item = self._models[list_key](**values)
            self._session.add(item)

        logger.info("Created %s %s", list_key, item.id)
        return item

    def update(self, list_key: str, item_id: UUID | str, data: dict[str, Any]) -> Any:
        """
        Partially update an item; only the given fields change.

        Raises:
            ValidationError: If any value breaks the declaration, or an
                immutable field is given.
            UniqueConstraintError: If a unique value is already used.
            ItemNotFoundError: If the item or a related id does not exist.
            ContentError: If the database refuses the write.
        """
        schema = self._schema(list_key)
        item = self.get(list_key, item_id)
        self._reject_unknown_fields(list_key, schema, data)

        changes: dict[str, Any] = {}
        for field_name, value in data.items():
            config = schema.fields[field_name]
            if config.is_immutable:
                self._reject(list_key, field_name, "cannot be changed after creation")

            if isinstance(config, RelationshipField):
                changes[field_name] = self._resolve_related(list_key, field_name, config, value)
                continue

            if value is not None:
                value = self._clean_scalar(list_key, field_name, config, value)
            if config.is_required and (value is None or value == ""):
                self._reject(list_key, field_name, "is required")
            if value is None and isinstance(config, SelectField) and config.default is not None:
                self._reject(list_key, field_name, "cannot be cleared")
            if value is not None and config.is_unique:
                self._check_unique(list_key, field_name, value, exclude_id=item.id)
            if value is not None and isinstance(config, PasswordField):
                value = hash_password(value)
            changes[field_name] = value

        with self._writing(list_key):
            for field_name, value in changes.items():
                setattr(item, field_name, value)

        logger.info("Updated %s %s (%s)", list_key, item.id, ", ".join(sorted(data)))
        return item

    def delete(self, list_key: str, item_id: UUID | str) -> None:
        """
        Delete an item, applying each relationship's delete policy.

        Raises:
            ItemNotFoundError: If the item does not exist.
        """
        item = self.get(list_key, item_id)
        with self._writing(list_key):
            self._session.delete(item)

        logger.info("Deleted %s %s", list_key, item_id)

    # -------------------------
    # Helpers
    # -------------------------

    def _schema(self, list_key: str) -> ListSchema:
        schema = self._registry.get_list(list_key)
        if schema is None or list_key not in self._models:
            raise UnknownListError(list_key)
        return schema

    def _reject(self, list_key: str, field_name: str, message: str) -> None:
        logger.warning("Rejected %s.%s: %s", list_key, field_name, message)
        raise ValidationError(list_key, field_name, message)

    def _reject_unknown_fields(
        self, list_key: str, schema: ListSchema, data: dict[str, Any]
    ) -> None:
        for field_name in data:
            config = schema.fields.get(field_name)
            if config is None:
                self._reject(list_key, field_name, "is not a field of this list")
            if isinstance(config, VirtualField):
                self._reject(list_key, field_name, "is computed and cannot be written")

    def _coerce_id(self, list_key: str, item_id: Any) -> UUID:
        if isinstance(item_id, UUID):
            return item_id
        try:
            return UUID(str(item_id))
        except ValueError:
            raise ItemNotFoundError(list_key, item_id)

    def _clean_scalar(self, list_key: str, field_name: str, config: Any, value: Any) -> Any:
        """Check a non-null scalar value against its field and normalize it."""
        if isinstance(config, TimestampField):
            if isinstance(value, str):
                try:
                    value = datetime.fromisoformat(value)
                except ValueError:
                    self._reject(list_key, field_name, f"'{value}' is not an ISO timestamp")
            if not isinstance(value, datetime):
                self._reject(list_key, field_name, "must be a timestamp")
            return value

        if isinstance(config, SelectField):
            value = getattr(value, "value", value)
            if value not in config.values:
                self._reject(
                    list_key,
                    field_name,
                    f"'{value}' is not one of {list(config.values)}",
                )
            return value

        if not isinstance(value, str):
            self._reject(list_key, field_name, "must be a string")
        if isinstance(config, PasswordField) and not password_fits(value):
            self._reject(list_key, field_name, f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    def _default(self, config: Any) -> Any:
        if isinstance(config, SelectField):
            return config.default
        if isinstance(config, TimestampField) and config.default_now:
            return datetime.now(timezone.utc)
        return None

    def _check_unique(
        self,
        list_key: str,
        field_name: str,
        value: Any,
        exclude_id: UUID | None = None,
    ) -> None:
        model = self._models[list_key]
        stmt = select(model.id).where(getattr(model, field_name) == value)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        if self._session.scalar(stmt.limit(1)) is not None:
            logger.warning("Rejected %s.%s: duplicate value", list_key, field_name)
            raise UniqueConstraintError(list_key, field_name, value)

    def _resolve_related(
        self, list_key: str, field_name: str, config: RelationshipField, value: Any
    ) -> Any:
        """Turn related ids into ORM instances."""
        if config.many:
            if value is None:
                return []
            if isinstance(value, (str, UUID)) or not hasattr(value, "__iter__"):
                self._reject(list_key, field_name, "expects a list of ids")
            return [self.get(config.target_list, related_id) for related_id in value]

        if value is None:
            if config.is_required:
                self._reject(list_key, field_name, "is required")
            return None
        return self.get(config.target_list, value)

    @contextmanager
    def _writing(self, list_key: str) -> Iterator[None]:
        """
        Apply a write inside a savepoint and flush it.

        A failed flush rolls back to the savepoint only, so earlier work in
        the caller's transaction survives and the session stays usable.
        """
        pending = set(self._session.new)
        try:
            with self._session.begin_nested():
                yield
        except IntegrityError as e:
            # Drop the failed item so the next flush does not retry it
            for obj in set(self._session.new) - pending:
                self._session.expunge(obj)
            logger.error("Integrity error on %s: %s", list_key, e.orig)
            raise ContentError(f"{list_key}: {e.orig}") from e
