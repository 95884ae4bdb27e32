"""
Custom form builder endpoints (admin only).
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_custom_form_service
from modules.identity.guards import require_admin
from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.models import CustomForm, FormRequest

from .models import (
    CustomFormRequest,
    CustomFormUpdate,
    FormRequestStatusUpdate,
    SendFormRequest,
    SendFormResponse,
)
from .service import CustomFormService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[CustomForm])
async def list_forms(
    service: CustomFormService = Depends(get_custom_form_service),
) -> list[CustomForm]:
    return await service.list_forms()


@router.post("", response_model=CustomForm, status_code=201)
async def create_form(
    request: CustomFormRequest,
    service: CustomFormService = Depends(get_custom_form_service),
) -> CustomForm:
    """Create a form. Fields with blank labels are dropped."""
    return await service.create_form(request)


@router.get("/requests", response_model=list[FormRequest])
async def list_requests(
    service: CustomFormService = Depends(get_custom_form_service),
) -> list[FormRequest]:
    """Every delivery of a custom form, newest first."""
    return await service.list_requests()


@router.patch("/requests/{request_id}", response_model=FormRequest)
async def update_request_status(
    request_id: str,
    request: FormRequestStatusUpdate,
    service: CustomFormService = Depends(get_custom_form_service),
) -> FormRequest:
    try:
        return await service.update_request_status(request_id, request.status)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Form request not found")


@router.patch("/{form_id}", response_model=CustomForm)
async def update_form(
    form_id: str,
    request: CustomFormUpdate,
    service: CustomFormService = Depends(get_custom_form_service),
) -> CustomForm:
    try:
        return await service.update_form(form_id, request)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Form not found")


@router.delete("/{form_id}", status_code=204)
async def delete_form(
    form_id: str,
    service: CustomFormService = Depends(get_custom_form_service),
) -> None:
    await service.delete_form(form_id)


@router.post("/{form_id}/send", response_model=SendFormResponse)
async def send_form(
    form_id: str,
    request: SendFormRequest,
    service: CustomFormService = Depends(get_custom_form_service),
) -> SendFormResponse:
    """Send a form to the given clients (all clients when none are given)."""
    try:
        return await service.send_to_clients(form_id, request.client_ids)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Form not found")
