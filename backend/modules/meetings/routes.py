"""
Meeting scheduling endpoints (admin only).
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_meeting_service
from modules.identity.guards import require_admin
from modules.persistence.models import AvailabilitySlot, IntegrationSettings

from .models import BookSlotRequest, CreateSlotRequest, MeetingListResponse, MeetingView
from .service import MeetingService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=MeetingListResponse)
async def list_meetings(service: MeetingService = Depends(get_meeting_service)) -> MeetingListResponse:
    """Meetings split into upcoming and past, each with its join link."""
    return await service.list_meetings()


@router.get("/slots", response_model=list[AvailabilitySlot])
async def list_slots(service: MeetingService = Depends(get_meeting_service)) -> list[AvailabilitySlot]:
    return await service.list_slots()


@router.post("/slots", response_model=AvailabilitySlot, status_code=201)
async def create_slot(
    request: CreateSlotRequest,
    service: MeetingService = Depends(get_meeting_service),
) -> AvailabilitySlot:
    return await service.create_slot(request)


@router.post("/slots/{slot_id}/book", response_model=MeetingView, status_code=201)
async def book_slot(
    slot_id: str,
    request: BookSlotRequest,
    service: MeetingService = Depends(get_meeting_service),
) -> MeetingView:
    """
    Book a free slot for a client, creating the meeting.

    A missing slot answers 404 and a taken one 409.
    """
    return await service.book_slot(slot_id, request)


@router.get("/settings", response_model=IntegrationSettings)
async def get_integration_settings(
    service: MeetingService = Depends(get_meeting_service),
) -> IntegrationSettings:
    return await service.get_integration_settings()


@router.put("/settings", response_model=IntegrationSettings)
async def update_integration_settings(
    settings: IntegrationSettings,
    service: MeetingService = Depends(get_meeting_service),
) -> IntegrationSettings:
    return await service.update_integration_settings(settings)
