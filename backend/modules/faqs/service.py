"""
FAQ set management service.
"""

import logging

from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import FAQSet

from .models import FAQSendResponse, FAQSetRequest, FAQSetUpdate

logger = logging.getLogger(__name__)


class FAQService:
    def __init__(self, gateway: IPersistenceBackend):
        self._gateway = gateway

    async def list_sets(self) -> list[FAQSet]:
        return await self._gateway.list_faq_sets()

    async def get_set(self, set_id: str) -> FAQSet:
        for faq_set in await self.list_sets():
            if faq_set.id == set_id:
                return faq_set
        raise RecordNotFoundError("faq_set", set_id)

    async def create_set(self, request: FAQSetRequest) -> FAQSet:
        return await self._gateway.create_faq_set(request.model_dump())

    async def update_set(self, set_id: str, request: FAQSetUpdate) -> FAQSet:
        return await self._gateway.update_faq_set(set_id, request.model_dump(exclude_unset=True))

    async def delete_set(self, set_id: str) -> None:
        await self._gateway.delete_faq_set(set_id)

    async def send_to_clients(self, set_id: str, client_ids: list[str]) -> FAQSendResponse:
        """
        Record the set as sent to each client.

        With no client ids the set goes to every client.
        """
        await self.get_set(set_id)
        if not client_ids:
            client_ids = [client.id for client in await self._gateway.list_clients()]

        notifications = await self._gateway.create_faq_notifications(set_id, client_ids)
        logger.info(f"Sent FAQ set {set_id} to {len(notifications)} clients")
        return FAQSendResponse(sent=len(notifications), notifications=notifications)
