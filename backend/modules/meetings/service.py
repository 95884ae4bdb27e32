"""
Meeting scheduling service.

Availability slots are offered by the photographer; booking one turns it
into a meeting with a generated Google Meet id.
"""

import logging
from datetime import datetime, time, timezone
from typing import Callable, Optional

from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import (
    AvailabilitySlot,
    ClientRecord,
    IntegrationSettings,
    Meeting,
)

from .exceptions import InvalidSlotTimesError, SlotAlreadyBookedError
from .links import generate_meet_id, meeting_link
from .models import BookSlotRequest, CreateSlotRequest, MeetingListResponse, MeetingView

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def couple_name(client: ClientRecord) -> Optional[str]:
    """'Bride & Groom' when both names are known, else the profile name."""
    bride = client.form_data.get("bride_name")
    groom = client.form_data.get("groom_name")
    if bride and groom:
        return f"{bride} & {groom}"
    return client.full_name


class MeetingService:
    """
    Args:
        gateway: Persistence backend
        clock: Source of "now" for the upcoming/past split
        meet_id_factory: Generates Meet ids for new bookings
    """

    def __init__(
        self,
        gateway: IPersistenceBackend,
        clock: Callable[[], datetime] = _utc_now,
        meet_id_factory: Callable[[], str] = generate_meet_id,
    ):
        self._gateway = gateway
        self._clock = clock
        self._meet_id_factory = meet_id_factory

    async def list_meetings(self) -> MeetingListResponse:
        """Meetings split at "now"; a meeting starting right now is upcoming."""
        settings = await self._gateway.get_integration_settings()
        now = self._clock()
        upcoming, past = [], []
        for meeting in await self._gateway.list_meetings():
            view = MeetingView(**meeting.model_dump(), link=meeting_link(meeting, settings))
            if _as_utc(meeting.scheduled_for) >= now:
                upcoming.append(view)
            else:
                past.append(view)
        upcoming.sort(key=lambda m: _as_utc(m.scheduled_for))
        past.sort(key=lambda m: _as_utc(m.scheduled_for), reverse=True)
        return MeetingListResponse(upcoming=upcoming, past=past)

    async def count_upcoming(self) -> int:
        now = self._clock()
        return sum(
            1 for m in await self._gateway.list_meetings() if _as_utc(m.scheduled_for) >= now
        )

    # -- Availability --------------------------------------------------------

    async def list_slots(self) -> list[AvailabilitySlot]:
        return await self._gateway.list_availability_slots()

    async def create_slot(self, request: CreateSlotRequest) -> AvailabilitySlot:
        start = _parse_time(request.start_time)
        end = _parse_time(request.end_time)
        if end <= start:
            raise InvalidSlotTimesError(request.start_time, request.end_time)

        duration = request.duration
        if duration is None:
            duration = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)

        return await self._gateway.create_availability_slot(
            {
                "date": request.date,
                "start_time": request.start_time,
                "end_time": request.end_time,
                "duration": duration,
                "meeting_type": request.meeting_type,
                "is_booked": False,
            }
        )

    async def book_slot(self, slot_id: str, request: BookSlotRequest) -> MeetingView:
        """
        Book a free slot for a client.

        Raises:
            RecordNotFoundError: If the slot or client does not exist
            SlotAlreadyBookedError: If the slot is taken
        """
        slot = await self._find_slot(slot_id)
        if slot.is_booked:
            raise SlotAlreadyBookedError(slot_id)

        client = await self._find_client(request.client_id)
        await self._gateway.update_availability_slot(slot_id, {"is_booked": True})

        scheduled_for = datetime.combine(
            slot.date, _parse_time(slot.start_time), tzinfo=timezone.utc
        )
        meeting = await self._gateway.create_meeting(
            {
                "client_id": client.id,
                "client_name": couple_name(client),
                "meeting_type": request.meeting_type or slot.meeting_type,
                "scheduled_for": scheduled_for,
                "meet_id": self._meet_id_factory(),
                "status": "scheduled",
            }
        )
        logger.info(f"Booked slot {slot_id} for client {client.id}")

        settings = await self._gateway.get_integration_settings()
        return MeetingView(**meeting.model_dump(), link=meeting_link(meeting, settings))

    # -- Integrations --------------------------------------------------------

    async def get_integration_settings(self) -> IntegrationSettings:
        return await self._gateway.get_integration_settings()

    async def update_integration_settings(self, settings: IntegrationSettings) -> IntegrationSettings:
        return await self._gateway.update_integration_settings(settings)

    # -- Internals -----------------------------------------------------------

    async def _find_slot(self, slot_id: str) -> AvailabilitySlot:
        for slot in await self._gateway.list_availability_slots():
            if slot.id == slot_id:
                return slot
        raise RecordNotFoundError("availability_slot", slot_id)

    async def _find_client(self, client_id: str) -> ClientRecord:
        for client in await self._gateway.list_clients():
            if client.id == client_id:
                return client
        raise RecordNotFoundError("client", client_id)
