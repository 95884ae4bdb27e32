"""
FAQ set endpoints (admin only).
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_faq_service
from modules.identity.guards import require_admin
from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.models import FAQSet

from .models import FAQSendResponse, FAQSetRequest, FAQSetUpdate, SendToClientsRequest
from .service import FAQService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[FAQSet])
async def list_faq_sets(service: FAQService = Depends(get_faq_service)) -> list[FAQSet]:
    return await service.list_sets()


@router.post("", response_model=FAQSet, status_code=201)
async def create_faq_set(
    request: FAQSetRequest,
    service: FAQService = Depends(get_faq_service),
) -> FAQSet:
    return await service.create_set(request)


@router.patch("/{set_id}", response_model=FAQSet)
async def update_faq_set(
    set_id: str,
    request: FAQSetUpdate,
    service: FAQService = Depends(get_faq_service),
) -> FAQSet:
    try:
        return await service.update_set(set_id, request)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="FAQ set not found")


@router.delete("/{set_id}", status_code=204)
async def delete_faq_set(
    set_id: str,
    service: FAQService = Depends(get_faq_service),
) -> None:
    await service.delete_set(set_id)


@router.post("/{set_id}/send", response_model=FAQSendResponse)
async def send_faq_set(
    set_id: str,
    request: SendToClientsRequest,
    service: FAQService = Depends(get_faq_service),
) -> FAQSendResponse:
    """Send a FAQ set to the given clients (all clients when none are given)."""
    try:
        return await service.send_to_clients(set_id, request.client_ids)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="FAQ set not found")
