"""
Custom form builder service.

Admins author extra intake forms (vendor contacts and the like), send
them to clients and track each delivery as a form request.
"""

import logging
from typing import Optional

from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import (
    CustomForm,
    CustomFormField,
    FormRequest,
    FormRequestStatus,
)

from .models import CustomFormRequest, CustomFormUpdate, SendFormResponse

logger = logging.getLogger(__name__)


def clean_fields(fields: Optional[list[CustomFormField]]) -> list[dict]:
    """Drop fields whose label is blank; they are builder leftovers."""
    return [f.model_dump() for f in fields or [] if f.label.strip()]


class CustomFormService:
    def __init__(self, gateway: IPersistenceBackend):
        self._gateway = gateway

    async def list_forms(self) -> list[CustomForm]:
        return await self._gateway.list_custom_forms()

    async def get_form(self, form_id: str) -> CustomForm:
        for form in await self.list_forms():
            if form.id == form_id:
                return form
        raise RecordNotFoundError("custom_form", form_id)

    async def create_form(self, request: CustomFormRequest) -> CustomForm:
        data = request.model_dump()
        data["fields"] = clean_fields(request.fields)
        return await self._gateway.create_custom_form(data)

    async def update_form(self, form_id: str, request: CustomFormUpdate) -> CustomForm:
        updates = request.model_dump(exclude_unset=True)
        if request.fields is not None:
            updates["fields"] = clean_fields(request.fields)
        return await self._gateway.update_custom_form(form_id, updates)

    async def delete_form(self, form_id: str) -> None:
        await self._gateway.delete_custom_form(form_id)

    async def list_requests(self) -> list[FormRequest]:
        return await self._gateway.list_form_requests()

    async def send_to_clients(self, form_id: str, client_ids: list[str]) -> SendFormResponse:
        """
        Create a pending request per client.

        With no client ids the form goes to every client.
        """
        await self.get_form(form_id)
        if not client_ids:
            client_ids = [client.id for client in await self._gateway.list_clients()]

        requests = await self._gateway.create_form_requests(form_id, client_ids)
        logger.info(f"Sent custom form {form_id} to {len(requests)} clients")
        return SendFormResponse(sent=len(requests), requests=requests)

    async def update_request_status(
        self, request_id: str, status: FormRequestStatus
    ) -> FormRequest:
        return await self._gateway.update_form_request_status(request_id, status)
