"""
Client management service.

Admin-side operations on client profiles and their wedding forms.
"""

import logging
from typing import Optional

from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import ClientRecord, UserProfile, UserRole

from .export import clients_to_csv
from .models import ClientSummary, CreateClientRequest, UpdateClientRequest

logger = logging.getLogger(__name__)


def matches_search(record: ClientRecord, term: str) -> bool:
    """Case-insensitive match on email, full name, bride or groom name."""
    term = term.strip().lower()
    if not term:
        return True
    form_data = record.form_data
    haystack = (
        record.email,
        record.full_name,
        form_data.get("bride_name"),
        form_data.get("groom_name"),
    )
    return any(term in str(value).lower() for value in haystack if value)


class ClientService:
    """
    Client CRUD over the persistence gateway.
    """

    def __init__(self, gateway: IPersistenceBackend):
        self._gateway = gateway

    async def list_clients(self, search: Optional[str] = None) -> list[ClientSummary]:
        records = await self._gateway.list_clients()
        if search:
            records = [r for r in records if matches_search(r, search)]
        return [ClientSummary.from_record(r) for r in records]

    async def get_client(self, client_id: str) -> ClientSummary:
        for record in await self._gateway.list_clients():
            if record.id == client_id:
                return ClientSummary.from_record(record)
        raise RecordNotFoundError("client", client_id)

    async def add_client(self, request: CreateClientRequest) -> UserProfile:
        """
        Create a client profile.

        An initial wedding form is written when any of bride name, groom
        name or wedding date is supplied.
        """
        profile = await self._gateway.create_profile(
            {
                "email": request.email,
                "full_name": request.full_name,
                "phone": request.phone,
                "role": UserRole.CLIENT.value,
            }
        )
        logger.info(f"Added client {profile.id}")

        if request.has_wedding_details:
            await self._gateway.save_wedding_form(
                profile.id,
                {
                    "bride_name": request.bride_name,
                    "groom_name": request.groom_name,
                    "wedding_date": request.wedding_date,
                    "venue_name": request.venue_name,
                    "contact_phone": request.phone or "",
                },
            )
        return profile

    async def update_client(self, client_id: str, request: UpdateClientRequest) -> UserProfile:
        updates = request.model_dump(exclude_unset=True, mode="json")
        return await self._gateway.update_profile(client_id, updates)

    async def delete_client(self, client_id: str) -> None:
        await self._gateway.delete_profile(client_id)
        logger.info(f"Deleted client {client_id}")

    async def export_csv(self, search: Optional[str] = None) -> str:
        return clients_to_csv(await self.list_clients(search))
