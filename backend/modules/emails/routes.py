"""
Email management endpoints (admin only).
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_email_service
from modules.identity.guards import require_admin
from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.models import EmailTemplate, ScheduledEmail

from .models import (
    EmailPreview,
    EmailTemplateRequest,
    EmailTemplateUpdate,
    ScheduleEmailRequest,
    SendEmailRequest,
    SendEmailResponse,
)
from .service import EmailService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/templates", response_model=list[EmailTemplate])
async def list_templates(service: EmailService = Depends(get_email_service)) -> list[EmailTemplate]:
    return await service.list_templates()


@router.post("/templates", response_model=EmailTemplate, status_code=201)
async def create_template(
    request: EmailTemplateRequest,
    service: EmailService = Depends(get_email_service),
) -> EmailTemplate:
    return await service.create_template(request)


@router.get("/templates/{template_id}", response_model=EmailTemplate)
async def get_template(
    template_id: str,
    service: EmailService = Depends(get_email_service),
) -> EmailTemplate:
    try:
        return await service.get_template(template_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")


@router.patch("/templates/{template_id}", response_model=EmailTemplate)
async def update_template(
    template_id: str,
    request: EmailTemplateUpdate,
    service: EmailService = Depends(get_email_service),
) -> EmailTemplate:
    try:
        return await service.update_template(template_id, request)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")


@router.delete("/templates/{template_id}", status_code=204)
async def delete_template(
    template_id: str,
    service: EmailService = Depends(get_email_service),
) -> None:
    await service.delete_template(template_id)


@router.get("/templates/{template_id}/preview/{client_id}", response_model=EmailPreview)
async def preview_template(
    template_id: str,
    client_id: str,
    service: EmailService = Depends(get_email_service),
) -> EmailPreview:
    """Render a template with one client's merge fields."""
    try:
        return await service.preview(template_id, client_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/send", response_model=SendEmailResponse)
async def send_email(
    request: SendEmailRequest,
    service: EmailService = Depends(get_email_service),
) -> SendEmailResponse:
    """Send a template to clients now."""
    try:
        return await service.send_now(request)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")


@router.get("/scheduled", response_model=list[ScheduledEmail])
async def list_scheduled(service: EmailService = Depends(get_email_service)) -> list[ScheduledEmail]:
    return await service.list_scheduled()


@router.post("/scheduled", response_model=ScheduledEmail, status_code=201)
async def schedule_email(
    request: ScheduleEmailRequest,
    service: EmailService = Depends(get_email_service),
) -> ScheduledEmail:
    """Queue a template for a future send."""
    try:
        return await service.schedule(request)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")


@router.post("/scheduled/{scheduled_email_id}/cancel", response_model=ScheduledEmail)
async def cancel_scheduled(
    scheduled_email_id: str,
    service: EmailService = Depends(get_email_service),
) -> ScheduledEmail:
    try:
        return await service.cancel_scheduled(scheduled_email_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Scheduled email not found")
