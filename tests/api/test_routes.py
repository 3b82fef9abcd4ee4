"""
Tests for the read-only HTTP API.

Runs the FastAPI app against the in-memory test database.
"""

import runpy

import pytest
import uvicorn
from fastapi.testclient import TestClient

from app.db.session import get_session
from app.main import app
from polldesk.core.content import ContentService


# -----------------------------
# Fixtures
# -----------------------------


@pytest.fixture
def client(session_factory):
    """Test client whose requests use the test database."""

    def override_get_session():
        with session_factory() as session:
            yield session
            session.commit()

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(session_factory) -> dict:
    """District North with user Ana Lee, committed."""
    with session_factory() as session:
        service = ContentService(session)
        north = service.create("District", {"name": "North"})
        ana = service.create(
            "User",
            {
                "first_name": "Ana",
                "last_name": "Lee",
                "email": "ana@example.com",
                "password": "secret1",
                "district": north.id,
            },
        )
        session.commit()
        return {"north": str(north.id), "ana": str(ana.id)}


# -----------------------------
# Health & Schema
# -----------------------------


class TestHealth:
    def test_healthz(self, client: TestClient) -> None:
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_module_serves_with_uvicorn(self, monkeypatch) -> None:
        """Running app.main as a script hands the app to uvicorn."""
        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

        runpy.run_module("app.main", run_name="__main__")

        assert len(calls) == 1
        args, kwargs = calls[0]
        assert args == ("app.main:app",)
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8000


class TestSchemaRoutes:
    """Tests for schema discovery."""

    def test_schema_lists_every_list(self, client: TestClient) -> None:
        response = client.get("/api/schema")
        assert response.status_code == 200
        keys = [entry["key"] for entry in response.json()["lists"]]
        assert keys == [
            "User",
            "District",
            "AccountType",
            "Poll",
            "PollAccess",
            "Answer",
            "Response",
            "Tag",
        ]

    def test_schema_field_details(self, client: TestClient) -> None:
        lists = {entry["key"]: entry for entry in client.get("/api/schema").json()["lists"]}
        email = next(f for f in lists["User"]["fields"] if f["name"] == "email")
        assert email["kind"] == "text"
        assert email["is_required"] is True
        assert email["is_unique"] is True

        created_by = next(f for f in lists["Poll"]["fields"] if f["name"] == "created_by")
        assert created_by["ref"] == "User.polls"
        assert created_by["many"] is False

    def test_password_never_described_as_column(self, client: TestClient) -> None:
        lists = {entry["key"]: entry for entry in client.get("/api/schema").json()["lists"]}
        assert "password" not in lists["User"]["initial_columns"]


# -----------------------------
# List Views
# -----------------------------


class TestListRoutes:
    """Tests for navigation, list views and cards."""

    def test_navigation_skips_hidden_lists(self, client: TestClient) -> None:
        response = client.get("/api/lists")
        assert response.status_code == 200
        keys = [entry["key"] for entry in response.json()["lists"]]
        assert keys == ["User", "District", "AccountType", "Poll", "PollAccess", "Tag"]

    def test_user_list_view(self, client: TestClient, seeded: dict) -> None:
        response = client.get("/api/lists/User/items")
        assert response.status_code == 200
        body = response.json()
        assert body["columns"] == ["first_name", "last_name", "district"]
        assert body["rows"] == [
            {
                "id": seeded["ana"],
                "first_name": "Ana",
                "last_name": "Lee",
                "district": "North",
            }
        ]

    def test_filter_by_relationship(self, client: TestClient, seeded: dict) -> None:
        response = client.get("/api/lists/User/items", params={"district": seeded["north"]})
        assert response.status_code == 200
        assert len(response.json()["rows"]) == 1

    def test_filter_by_email(self, client: TestClient, seeded: dict) -> None:
        response = client.get("/api/lists/User/items", params={"email": "bo@example.com"})
        assert response.status_code == 200
        assert response.json()["rows"] == []

    def test_unfilterable_field(self, client: TestClient, seeded: dict) -> None:
        response = client.get("/api/lists/User/items", params={"first_name": "Ana"})
        assert response.status_code == 400

    def test_unknown_list(self, client: TestClient) -> None:
        response = client.get("/api/lists/Post/items")
        assert response.status_code == 404

    def test_district_cards(self, client: TestClient, seeded: dict) -> None:
        response = client.get(f"/api/lists/District/items/{seeded['north']}/users")
        assert response.status_code == 200
        assert response.json()["cards"] == [
            {"first_name": "Ana", "last_name": "Lee", "id": seeded["ana"]}
        ]

    def test_cards_for_non_card_field(self, client: TestClient, seeded: dict) -> None:
        response = client.get(f"/api/lists/User/items/{seeded['ana']}/polls")
        assert response.status_code == 400

    def test_cards_for_unknown_item(self, client: TestClient) -> None:
        response = client.get("/api/lists/District/items/not-a-uuid/users")
        assert response.status_code == 404
