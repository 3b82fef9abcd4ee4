"""
Tests for the ORM models.

Tests that every model materializes its list declaration faithfully.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import Text, inspect
from sqlalchemy.exc import IntegrityError

from polldesk.core.schema_registry import (
    OnDelete,
    SchemaRegistry,
    TextField,
    get_default_registry,
)
from polldesk.core.security import hash_password
from polldesk.db.models import MODELS, District, Poll, PollAccess


@pytest.fixture
def registry() -> SchemaRegistry:
    return get_default_registry()


class TestModelsMatchDeclaration:
    """Each declared list should have a model with matching columns and relationships."""

    def test_every_list_has_a_model(self, registry: SchemaRegistry) -> None:
        assert sorted(MODELS) == sorted(registry.list_keys())

    @pytest.mark.parametrize("list_key", sorted(MODELS))
    def test_scalar_fields_are_columns(self, registry: SchemaRegistry, list_key: str) -> None:
        columns = inspect(MODELS[list_key]).columns
        for field_name, config in registry.scalar_fields(list_key).items():
            assert field_name in columns
            if config.is_required:
                assert columns[field_name].nullable is False
            if config.is_unique:
                assert columns[field_name].unique

    @pytest.mark.parametrize("list_key", sorted(MODELS))
    def test_text_fields_have_no_length_limit(
        self, registry: SchemaRegistry, list_key: str
    ) -> None:
        columns = inspect(MODELS[list_key]).columns
        for field_name, config in registry.scalar_fields(list_key).items():
            if isinstance(config, TextField):
                assert isinstance(columns[field_name].type, Text)
                assert columns[field_name].type.length is None

    @pytest.mark.parametrize("list_key", sorted(MODELS))
    def test_relationships_match(self, registry: SchemaRegistry, list_key: str) -> None:
        mapper = inspect(MODELS[list_key])
        declared = registry.relationship_fields(list_key)
        assert set(mapper.relationships.keys()) == set(declared)

        for field_name, config in declared.items():
            relationship = mapper.relationships[field_name]
            assert relationship.uselist == config.many
            assert relationship.mapper.class_ is MODELS[config.target_list]
            assert relationship.back_populates == config.target_field
            assert relationship.cascade.delete == (config.on_delete == OnDelete.CASCADE)

    def test_required_relationships_have_non_null_keys(self) -> None:
        columns = inspect(MODELS["Response"]).columns
        assert columns["answer_id"].nullable is False
        assert columns["user_id"].nullable is False

    def test_email_is_indexed(self) -> None:
        assert inspect(MODELS["User"]).columns["email"].index

    def test_password_column_name(self) -> None:
        assert inspect(MODELS["User"]).columns["password"].name == "password_hash"


class TestDatabaseConstraints:
    """Constraints hold even when the content service is bypassed."""

    def test_empty_name_rejected(self, session) -> None:
        session.add(District(name=""))
        with pytest.raises(IntegrityError):
            session.flush()

    def test_invalid_level_rejected(self, session) -> None:
        session.add(PollAccess(level="archived"))
        with pytest.raises((IntegrityError, LookupError)):
            session.flush()

    def test_level_defaults_to_draft(self, session) -> None:
        access = PollAccess()
        session.add(access)
        session.flush()
        assert access.level == "draft"

    def test_created_at_cannot_move(self, session) -> None:
        poll = Poll(question="More parks?", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        session.add(poll)
        session.flush()
        with pytest.raises(ValueError, match="cannot change"):
            poll.created_at = datetime.now(timezone.utc)

    def test_duplicate_email_rejected(self, session) -> None:
        User = MODELS["User"]
        password = hash_password("secret1")
        session.add(User(first_name="A", last_name="L", email="a@example.com", password=password))
        session.add(User(first_name="B", last_name="L", email="a@example.com", password=password))
        with pytest.raises(IntegrityError):
            session.flush()
