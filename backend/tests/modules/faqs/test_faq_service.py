"""Tests for FAQ set management."""

import pytest
from unittest.mock import AsyncMock

from modules.faqs.models import FAQSetRequest, FAQSetUpdate
from modules.faqs.service import FAQService
from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.memory_backend import InMemoryBackend
from modules.persistence.models import FAQItem


@pytest.fixture
def service():
    return FAQService(InMemoryBackend())


class TestFAQService:
    @pytest.mark.asyncio
    async def test_list_and_get(self, service):
        sets = await service.list_sets()

        assert [s.name for s in sets] == ["Wedding Day Timeline", "Photography Preparation"]
        assert len((await service.get_set("1")).faqs) == 2

    @pytest.mark.asyncio
    async def test_create(self, service):
        created = await service.create_set(
            FAQSetRequest(name="Venue", faqs=[FAQItem(question="Parking?", answer="Yes")])
        )
        assert created.category == "general"
        assert created.faqs[0].answer == "Yes"

    @pytest.mark.asyncio
    async def test_update_only_sends_given_fields(self):
        gateway = AsyncMock()
        await FAQService(gateway).update_set("1", FAQSetUpdate(category="timeline"))
        gateway.update_faq_set.assert_awaited_once_with("1", {"category": "timeline"})

    @pytest.mark.asyncio
    async def test_send_to_selected_clients(self, service):
        response = await service.send_to_clients("1", ["mock-client-2"])

        assert response.sent == 1
        assert response.notifications[0].client_id == "mock-client-2"
        assert response.notifications[0].faq_set_id == "1"

    @pytest.mark.asyncio
    async def test_send_without_ids_goes_to_everyone(self, service):
        response = await service.send_to_clients("2", [])
        assert {n.client_id for n in response.notifications} == {"mock-client-1", "mock-client-2"}

    @pytest.mark.asyncio
    async def test_send_unknown_set(self, service):
        with pytest.raises(RecordNotFoundError):
            await service.send_to_clients("99", [])
