"""
Tests for List View rendering.

Tests that rows and cards follow the declared UI hints.
"""

from dataclasses import replace

import pytest

from polldesk.core.content import ContentService, ListView, ValidationError
from polldesk.core.schema_registry import LISTS, SchemaRegistry, VirtualField


# -----------------------------
# Fixtures
# -----------------------------


@pytest.fixture
def view() -> ListView:
    return ListView()


@pytest.fixture
def ana(service: ContentService):
    north = service.create("District", {"name": "North"})
    return service.create(
        "User",
        {
            "first_name": "Ana",
            "last_name": "Lee",
            "email": "ana@example.com",
            "password": "secret1",
            "district": north.id,
        },
    )


@pytest.fixture
def poll(service: ContentService, ana):
    public = service.create("PollAccess", {"level": "public"})
    return service.create(
        "Poll",
        {"question": "More bike lanes?", "created_by": ana.id, "access": public.id},
    )


# -----------------------------
# Row Rendering
# -----------------------------


class TestRender:
    """Tests for list view rows."""

    def test_rows_carry_ids(self, view: ListView, ana) -> None:
        page = view.render("User", [ana])
        assert page.rows[0]["id"] == str(ana.id)
        assert page.rows[0]["first_name"] == "Ana"

    def test_single_relationship_renders_label(self, view: ListView, poll) -> None:
        """Poll.created_by shows the user's label field (first name)."""
        page = view.render("Poll", [poll])
        assert page.values() == [["More bike lanes?", "Ana"]]

    def test_missing_relationship_renders_none(self, service: ContentService, view: ListView) -> None:
        poll = service.create("Poll", {"question": "Orphan?"})
        assert view.render("Poll", [poll]).values() == [["Orphan?", None]]

    def test_many_relationship_renders_labels(
        self, service: ContentService, view: ListView, poll
    ) -> None:
        transport = service.create("Tag", {"name": "Transport"})
        budget = service.create("Tag", {"name": "Budget"})
        service.update("Poll", poll.id, {"tags": [transport.id, budget.id]})
        page = view.render("Poll", [poll], columns=("tags",))
        assert page.values() == [[["Transport", "Budget"]]]

    def test_select_renders_value(self, view: ListView, poll) -> None:
        page = view.render("PollAccess", [poll.access])
        assert page.values() == [["public"]]

    def test_timestamp_renders_iso(self, view: ListView, poll) -> None:
        page = view.render("Poll", [poll], columns=("created_at",))
        assert page.values() == [[poll.created_at.isoformat()]]

    def test_label_through_relationship(self, service: ContentService, view: ListView, poll, ana) -> None:
        """Response is labelled by its answer, which is labelled by its text."""
        answer = service.create("Answer", {"answer": "Yes", "poll": poll.id})
        response = service.create("Response", {"answer": answer.id, "user": ana.id})
        assert view.label(response, "Response") == "Yes"

    def test_password_column_rejected(self, view: ListView, ana) -> None:
        """The stored hash never reaches a list view."""
        with pytest.raises(ValidationError, match="is a password"):
            view.render("User", [ana], columns=("first_name", "password"))

    def test_empty_page(self, view: ListView) -> None:
        page = view.render("Tag", [])
        assert page.columns == ("name",)
        assert page.rows == ()


# -----------------------------
# Cards
# -----------------------------


class TestCards:
    """Tests for relationships displayed as cards."""

    def test_cards_for_district_users(self, view: ListView, ana) -> None:
        assert view.cards(ana.district, "District", "users") == [
            {"first_name": "Ana", "last_name": "Lee", "id": str(ana.id)}
        ]

    def test_non_card_field_rejected(self, view: ListView, poll) -> None:
        with pytest.raises(ValidationError, match="not displayed as cards"):
            view.cards(poll, "Poll", "tags")

    def test_scalar_field_rejected(self, view: ListView, ana) -> None:
        with pytest.raises(ValidationError):
            view.cards(ana, "User", "first_name")


# -----------------------------
# Virtual Fields
# -----------------------------


class TestVirtualFields:
    """Virtual fields resolve from the item and cannot be written."""

    @pytest.fixture
    def registry(self) -> SchemaRegistry:
        lists = dict(LISTS)
        user = lists["User"]
        lists["User"] = replace(
            user,
            fields={
                **user.fields,
                "full_name": VirtualField(
                    resolve=lambda item: f"{item.first_name} {item.last_name}",
                    description="First and last name",
                ),
            },
        )
        return SchemaRegistry(lists)

    def test_virtual_column(self, registry: SchemaRegistry, ana) -> None:
        page = ListView(registry).render("User", [ana], columns=("full_name", "district"))
        assert page.values() == [["Ana Lee", "North"]]

    def test_virtual_field_not_writable(self, registry: SchemaRegistry, session, ana) -> None:
        service = ContentService(session, registry=registry)
        with pytest.raises(ValidationError, match="computed"):
            service.update("User", ana.id, {"full_name": "Ann Lee"})
