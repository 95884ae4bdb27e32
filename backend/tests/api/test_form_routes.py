"""
Tests for the wedding form endpoints (/api/form).

The registry is built on a ManualScheduler so autosaves only happen when a
test advances the virtual clock.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_form_registry, get_gateway
from modules.persistence.exceptions import BackendTransportError
from modules.persistence.memory_backend import InMemoryBackend


class RecordingBackend(InMemoryBackend):
    """Demo backend that remembers every wedding form write."""

    def __init__(self, fail_saves: bool = False):
        super().__init__()
        self.saves: list[dict] = []
        self.fail_saves = fail_saves

    async def save_wedding_form(self, user_id, form_data):
        if self.fail_saves:
            raise BackendTransportError("connection refused")
        self.saves.append(dict(form_data))
        return await super().save_wedding_form(user_id, form_data)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def app(backend, form_registry):
    app = create_app()
    app.dependency_overrides[get_gateway] = lambda: backend
    app.dependency_overrides[get_form_registry] = lambda: form_registry
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


COMPLETE_DETAILS = {
    "ceremony_time": "14:00",
    "reception_time": "18:00",
    "contact_phone": "+44 123 456 7890",
}


class TestGetForm:

    def test_loads_demo_record(self, client):
        response = client.get("/api/form")

        assert response.status_code == 200
        data = response.json()
        assert data["form_data"]["bride_name"] == "Sarah"
        assert data["form_data"]["venue_name"] == "Thornton Manor"
        # Defaults fill in every field the record does not carry
        assert data["form_data"]["ceremony_time"] == ""
        assert data["form_data"]["bridal_party_count"] == 0
        assert data["completion"] == 57
        assert data["autosave_pending"] is False
        assert len(data["sections"]) == 6

    def test_load_does_not_write(self, client, backend):
        client.get("/api/form")
        assert backend.saves == []


class TestUpdates:

    def test_update_field_is_optimistic(self, client, backend):
        response = client.put("/api/form/fields/ceremony_time", json={"value": "14:00"})

        assert response.status_code == 200
        data = response.json()
        assert data["form_data"]["ceremony_time"] == "14:00"
        assert data["completion"] == 71
        assert data["autosave_pending"] is True
        assert backend.saves == []

    def test_burst_of_edits_saves_once(self, client, backend, manual_scheduler):
        client.put("/api/form/fields/ceremony_time", json={"value": "14:00"})
        client.put("/api/form/fields/reception_time", json={"value": "18:00"})
        client.put("/api/form/fields/bride_name", json={"value": "Sara"})

        asyncio.run(manual_scheduler.advance(2.0))

        assert len(backend.saves) == 1
        assert backend.saves[0]["bride_name"] == "Sara"
        assert backend.saves[0]["reception_time"] == "18:00"

        data = client.get("/api/form").json()
        assert data["autosave_pending"] is False
        assert data["last_saved_at"] is not None

    def test_section_update(self, client):
        response = client.patch("/api/form", json={"values": COMPLETE_DETAILS})

        assert response.status_code == 200
        assert response.json()["completion"] == 100

    def test_empty_section_update_rejected(self, client):
        response = client.patch("/api/form", json={"values": {}})
        assert response.status_code == 422

    def test_reset_returns_to_defaults(self, client, backend):
        client.put("/api/form/fields/ceremony_time", json={"value": "14:00"})

        data = client.post("/api/form/reset").json()

        assert data["completion"] == 0
        assert data["form_data"]["bride_name"] == ""
        assert data["autosave_pending"] is False
        assert backend.saves == []


class TestSave:

    def test_explicit_save(self, client, backend):
        client.put("/api/form/fields/ceremony_time", json={"value": "14:00"})

        response = client.post("/api/form/save")

        assert response.status_code == 200
        data = response.json()
        assert data["saved"] is True
        assert data["completion"] == 71
        assert len(backend.saves) == 1

    def test_explicit_save_cancels_pending_autosave(self, client, backend, manual_scheduler):
        client.put("/api/form/fields/ceremony_time", json={"value": "14:00"})
        client.post("/api/form/save")

        asyncio.run(manual_scheduler.advance(5.0))

        assert len(backend.saves) == 1

    def test_save_failure_is_reported(self, app):
        app.dependency_overrides[get_gateway] = lambda: RecordingBackend(fail_saves=True)
        client = TestClient(app)

        response = client.post("/api/form/save")

        assert response.status_code == 502
        assert response.json()["code"] == "FORM_SAVE_FAILED"

    def test_autosave_failure_keeps_local_state(self, app, manual_scheduler):
        app.dependency_overrides[get_gateway] = lambda: RecordingBackend(fail_saves=True)
        client = TestClient(app)

        client.put("/api/form/fields/ceremony_time", json={"value": "14:00"})
        asyncio.run(manual_scheduler.advance(2.0))

        data = client.get("/api/form").json()
        assert data["form_data"]["ceremony_time"] == "14:00"
        assert data["last_saved_at"] is None


class TestSections:

    def test_lists_sections_in_order(self, client):
        data = client.get("/api/form/sections").json()
        assert [s["id"] for s in data] == [
            "basic", "getting-ready", "ceremony", "reception", "groups", "special",
        ]

    def test_section_view(self, client):
        data = client.get("/api/form/sections/ceremony").json()

        assert data["index"] == 2
        assert data["previous_id"] == "getting-ready"
        assert data["next_id"] == "reception"
        assert "ceremony_time" in data["fields"]

    def test_unknown_section_falls_back_to_first(self, client):
        data = client.get("/api/form/sections/honeymoon").json()

        assert data["id"] == "basic"
        assert data["index"] == 0
        assert data["previous_id"] is None
        assert data["fields"]["bride_name"] == "Sarah"


class TestDashboard:

    def test_dashboard(self, client):
        data = client.get("/api/form/dashboard").json()

        assert data["completion"] == 57
        assert data["celebrate"] is False
        assert data["message"].startswith("💫")
        assert isinstance(data["days_until_wedding"], int)

    def test_celebrates_once_on_completion(self, client):
        client.patch("/api/form", json={"values": COMPLETE_DETAILS})

        first = client.get("/api/form/dashboard").json()
        second = client.get("/api/form/dashboard").json()

        assert first["completion"] == 100
        assert first["celebrate"] is True
        assert second["celebrate"] is False

    def test_timeline_sorted_by_time(self, client):
        client.patch(
            "/api/form",
            json={"values": {"reception_time": "18:00", "ceremony_time": "14:00"}},
        )
        timeline = client.get("/api/form/dashboard").json()["timeline"]

        assert [entry["event"] for entry in timeline] == ["Ceremony", "Reception"]
        assert timeline[0]["location"] == "Thornton Manor"
