"""Tests for the in-memory demo backend."""

import pytest
from datetime import datetime, timedelta, timezone

from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.memory_backend import DEMO_FORM_DATA, InMemoryBackend
from modules.persistence.models import FormRequestStatus, ScheduledEmailStatus


NOW = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)


@pytest.fixture
def backend():
    return InMemoryBackend(clock=lambda: NOW)


class TestInMemoryBackend:
    def test_satisfies_the_gateway_protocol(self, backend):
        assert isinstance(backend, IPersistenceBackend)
        assert backend.is_demo is True

    @pytest.mark.asyncio
    async def test_every_user_reads_the_same_sample_form(self, backend):
        first = await backend.get_wedding_form("user-a")
        second = await backend.get_wedding_form("user-b")

        assert first.form_data == DEMO_FORM_DATA
        assert second.form_data == DEMO_FORM_DATA
        assert second.user_id == "user-b"

    @pytest.mark.asyncio
    async def test_writes_do_not_change_later_reads(self, backend):
        saved = await backend.save_wedding_form("user-a", {"bride_name": "Changed"})

        assert saved.form_data == {"bride_name": "Changed"}
        assert saved.updated_at == NOW
        reread = await backend.get_wedding_form("user-a")
        assert reread.form_data["bride_name"] == "Sarah"

    @pytest.mark.asyncio
    async def test_returned_form_data_is_a_copy(self, backend):
        form = await backend.get_wedding_form("user-a")
        form.form_data["bride_name"] = "Mutated"

        assert (await backend.get_wedding_form("user-a")).form_data["bride_name"] == "Sarah"

    @pytest.mark.asyncio
    async def test_clients_and_profiles(self, backend):
        clients = await backend.list_clients()

        assert [c.id for c in clients] == ["mock-client-1", "mock-client-2"]
        profile = await backend.get_profile("mock-client-2")
        assert profile.full_name == "Emma Wilson"
        assert await backend.get_profile("unknown") is None

    @pytest.mark.asyncio
    async def test_create_profile_keeps_given_id(self, backend):
        created = await backend.create_profile({"id": "user-9", "email": "a@example.com"})
        generated = await backend.create_profile({"email": "b@example.com"})

        assert created.id == "user-9"
        assert generated.id == "mock-new-client"

    @pytest.mark.asyncio
    async def test_update_unknown_profile_raises(self, backend):
        with pytest.raises(RecordNotFoundError):
            await backend.update_profile("unknown", {"full_name": "X"})

    @pytest.mark.asyncio
    async def test_relative_fixtures_follow_the_clock(self, backend):
        meetings = await backend.list_meetings()
        slots = await backend.list_availability_slots()

        assert meetings[0].scheduled_for == NOW + timedelta(days=2)
        assert slots[0].date == NOW.date()
        assert not slots[0].is_booked and slots[1].is_booked

    @pytest.mark.asyncio
    async def test_status_updates_echo_without_persisting(self, backend):
        cancelled = await backend.update_scheduled_email_status("1", ScheduledEmailStatus.CANCELLED)
        completed = await backend.update_form_request_status("1", FormRequestStatus.COMPLETED)

        assert cancelled.status == ScheduledEmailStatus.CANCELLED
        assert completed.status == FormRequestStatus.COMPLETED
        assert (await backend.list_scheduled_emails())[0].status == ScheduledEmailStatus.SCHEDULED

    @pytest.mark.asyncio
    async def test_unknown_ids_raise_not_found(self, backend):
        with pytest.raises(RecordNotFoundError):
            await backend.get_email_template("99")
        with pytest.raises(RecordNotFoundError):
            await backend.update_faq_set("99", {"name": "x"})
        with pytest.raises(RecordNotFoundError):
            await backend.update_availability_slot("99", {"is_booked": True})
