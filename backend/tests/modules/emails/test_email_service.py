"""Tests for the email service."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from modules.emails.dispatcher import IEmailDispatcher, LoggingEmailDispatcher
from modules.emails.models import ScheduleEmailRequest, SendEmailRequest
from modules.emails.service import EmailService
from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.memory_backend import InMemoryBackend
from modules.persistence.models import ClientRecord, ScheduledEmailStatus
from shared.exceptions import ValidationError


NOW = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)


@pytest.fixture
def backend():
    return InMemoryBackend(clock=lambda: NOW)


@pytest.fixture
def service(backend):
    return EmailService(backend, LoggingEmailDispatcher(demo=True), clock=lambda: NOW)


class TestPreview:
    @pytest.mark.asyncio
    async def test_merges_client_details(self, service):
        preview = await service.preview("1", "mock-client-1")

        assert preview.subject == "Complete Your Wedding Form - Sarah & Michael"
        assert "15/07/2024" in preview.body
        assert preview.body.endswith("Sky Photography Team")
        assert preview.recipient == "sarah.johnson@example.com"

    @pytest.mark.asyncio
    async def test_unknown_client(self, service):
        with pytest.raises(RecordNotFoundError):
            await service.preview("1", "nobody")

    @pytest.mark.asyncio
    async def test_unknown_template(self, service):
        with pytest.raises(RecordNotFoundError):
            await service.preview("99", "mock-client-1")


class TestSendNow:
    @pytest.mark.asyncio
    async def test_dispatches_one_email_per_client(self, service):
        response = await service.send_now(
            SendEmailRequest(template_id="2", client_ids=["mock-client-1", "mock-client-2"])
        )

        assert response.sent == 2
        assert [r.recipient for r in response.results] == [
            "sarah.johnson@example.com",
            "emma.wilson@example.com",
        ]
        assert all(r.message_id == "demo-message-id" for r in response.results)

    @pytest.mark.asyncio
    async def test_clients_without_email_are_skipped(self):
        gateway = AsyncMock()
        gateway.get_email_template.return_value = (await InMemoryBackend().list_email_templates())[0]
        gateway.list_clients.return_value = [ClientRecord(id="c1", email=None)]
        dispatcher = AsyncMock(spec=IEmailDispatcher)
        service = EmailService(gateway, dispatcher)

        response = await service.send_now(SendEmailRequest(template_id="1", client_ids=["c1"]))

        assert response.sent == 0
        assert response.skipped == ["c1"]
        dispatcher.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_live_dispatcher_generates_message_ids(self):
        result = await LoggingEmailDispatcher().send("a@example.com", "Hi", "Body")
        assert result.success
        assert result.message_id.startswith("msg-")


class TestSchedule:
    @pytest.mark.asyncio
    async def test_schedules_future_send(self, service):
        scheduled = await service.schedule(
            ScheduleEmailRequest(
                template_id="1",
                client_ids=["mock-client-1", "mock-client-2"],
                scheduled_for=NOW + timedelta(days=1),
            )
        )

        assert scheduled.template_name == "Wedding Form Reminder"
        assert scheduled.recipient_count == 2
        assert scheduled.status == ScheduledEmailStatus.SCHEDULED

    @pytest.mark.asyncio
    async def test_naive_times_are_treated_as_utc(self, service):
        scheduled = await service.schedule(
            ScheduleEmailRequest(
                template_id="1",
                client_ids=["mock-client-1"],
                scheduled_for=datetime(2024, 6, 2, 9, 0),
            )
        )
        assert scheduled.scheduled_for.tzinfo is not None

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(minutes=-5)])
    @pytest.mark.asyncio
    async def test_rejects_times_not_in_the_future(self, service, offset):
        with pytest.raises(ValidationError) as exc_info:
            await service.schedule(
                ScheduleEmailRequest(
                    template_id="1", client_ids=["mock-client-1"], scheduled_for=NOW + offset
                )
            )
        assert exc_info.value.code == "SCHEDULE_IN_PAST"

    @pytest.mark.asyncio
    async def test_cancel(self, service):
        cancelled = await service.cancel_scheduled("1")
        assert cancelled.status == ScheduledEmailStatus.CANCELLED
