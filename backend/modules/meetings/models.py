"""
Meeting scheduling request/response models.
"""

from datetime import date as date_type
from typing import Optional
from pydantic import BaseModel, Field

from modules.persistence.models import Meeting

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class MeetingView(Meeting):
    """A meeting with its resolved join link."""

    link: str


class MeetingListResponse(BaseModel):
    upcoming: list[MeetingView]
    past: list[MeetingView]


class CreateSlotRequest(BaseModel):
    date: date_type
    start_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM")
    end_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM")
    duration: Optional[int] = Field(None, gt=0, description="Minutes; derived from the times when omitted")
    meeting_type: str = "consultation"


class BookSlotRequest(BaseModel):
    client_id: str
    meeting_type: Optional[str] = None
