"""
Email management service.

Template CRUD, merged previews, immediate sends through the dispatcher
and scheduled sends recorded for later.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import (
    ClientRecord,
    EmailTemplate,
    ScheduledEmail,
    ScheduledEmailStatus,
)
from shared.exceptions import ValidationError

from .dispatcher import IEmailDispatcher
from .merge import merge_placeholders
from .models import (
    EmailPreview,
    EmailTemplateRequest,
    EmailTemplateUpdate,
    ScheduleEmailRequest,
    SendEmailRequest,
    SendEmailResponse,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EmailService:
    """
    Args:
        gateway: Persistence backend
        dispatcher: Where immediate sends go
        clock: Source of "now" for schedule validation
    """

    def __init__(
        self,
        gateway: IPersistenceBackend,
        dispatcher: IEmailDispatcher,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._gateway = gateway
        self._dispatcher = dispatcher
        self._clock = clock

    # -- Templates -----------------------------------------------------------

    async def list_templates(self) -> list[EmailTemplate]:
        return await self._gateway.list_email_templates()

    async def get_template(self, template_id: str) -> EmailTemplate:
        return await self._gateway.get_email_template(template_id)

    async def create_template(self, request: EmailTemplateRequest) -> EmailTemplate:
        return await self._gateway.create_email_template(request.model_dump())

    async def update_template(self, template_id: str, request: EmailTemplateUpdate) -> EmailTemplate:
        return await self._gateway.update_email_template(
            template_id, request.model_dump(exclude_unset=True)
        )

    async def delete_template(self, template_id: str) -> None:
        await self._gateway.delete_email_template(template_id)

    # -- Merging and sending -------------------------------------------------

    async def preview(self, template_id: str, client_id: str) -> EmailPreview:
        """Merge a template with one client's wedding details."""
        template = await self.get_template(template_id)
        client = await self._find_client(client_id)
        return self._render(template, client)

    async def send_now(self, request: SendEmailRequest) -> SendEmailResponse:
        """Merge and dispatch a template to each client that has an email."""
        template = await self.get_template(request.template_id)
        clients = await self._find_clients(request.client_ids)

        results = []
        skipped = []
        for client in clients:
            if not client.email:
                skipped.append(client.id)
                continue
            rendered = self._render(template, client)
            results.append(
                await self._dispatcher.send(client.email, rendered.subject, rendered.body)
            )

        logger.info(f"Sent template {template.id} to {len(results)} clients")
        return SendEmailResponse(sent=len(results), results=results, skipped=skipped)

    # -- Scheduling ----------------------------------------------------------

    async def list_scheduled(self) -> list[ScheduledEmail]:
        return await self._gateway.list_scheduled_emails()

    async def schedule(self, request: ScheduleEmailRequest) -> ScheduledEmail:
        """
        Queue a template for later.

        Raises:
            ValidationError: If the send time is not in the future
        """
        scheduled_for = request.scheduled_for
        if scheduled_for.tzinfo is None:
            scheduled_for = scheduled_for.replace(tzinfo=timezone.utc)
        if scheduled_for <= self._clock():
            raise ValidationError(
                "Scheduled time must be in the future",
                code="SCHEDULE_IN_PAST",
                details={"scheduled_for": scheduled_for.isoformat()},
            )

        template = await self.get_template(request.template_id)
        return await self._gateway.create_scheduled_email(
            {
                "template_id": template.id,
                "template_name": template.name,
                "client_ids": request.client_ids,
                "recipient_count": len(request.client_ids),
                "scheduled_for": scheduled_for,
                "status": ScheduledEmailStatus.SCHEDULED.value,
            }
        )

    async def cancel_scheduled(self, scheduled_email_id: str) -> ScheduledEmail:
        return await self._gateway.update_scheduled_email_status(
            scheduled_email_id, ScheduledEmailStatus.CANCELLED
        )

    # -- Internals -----------------------------------------------------------

    def _render(self, template: EmailTemplate, client: ClientRecord) -> EmailPreview:
        form_data = client.form_data
        return EmailPreview(
            template_id=template.id,
            client_id=client.id,
            recipient=client.email,
            subject=merge_placeholders(template.subject, form_data),
            body=merge_placeholders(template.template, form_data),
        )

    async def _find_client(self, client_id: str) -> ClientRecord:
        clients = await self._find_clients([client_id])
        if not clients:
            raise RecordNotFoundError("client", client_id)
        return clients[0]

    async def _find_clients(self, client_ids: list[str]) -> list[ClientRecord]:
        wanted = set(client_ids)
        return [c for c in await self._gateway.list_clients() if c.id in wanted]
