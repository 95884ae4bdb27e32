"""
Meetings module.

Public API:
- MeetingService: Meetings, availability slots and booking
- meeting_link: Join link for a meeting
- generate_meet_id: New Google Meet style ids
"""

from .exceptions import SlotAlreadyBookedError, InvalidSlotTimesError
from .links import MEET_BASE_URL, generate_meet_id, meeting_link
from .models import (
    MeetingView,
    MeetingListResponse,
    CreateSlotRequest,
    BookSlotRequest,
)
from .service import MeetingService, couple_name

__all__ = [
    "SlotAlreadyBookedError",
    "InvalidSlotTimesError",
    "MEET_BASE_URL",
    "generate_meet_id",
    "meeting_link",
    "MeetingView",
    "MeetingListResponse",
    "CreateSlotRequest",
    "BookSlotRequest",
    "MeetingService",
    "couple_name",
]
