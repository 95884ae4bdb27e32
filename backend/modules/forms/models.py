"""
Wedding form API models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from modules.persistence.models import FieldMap, FieldValue


class UpdateFieldRequest(BaseModel):
    value: FieldValue


class UpdateSectionRequest(BaseModel):
    values: dict[str, FieldValue] = Field(..., min_length=1)


class SectionProgress(BaseModel):
    id: str
    title: str
    filled: int
    total: int
    started: bool
    complete: bool


class FormStateResponse(BaseModel):
    """The caller's working copy of their wedding form."""

    form_data: FieldMap
    completion: int = Field(..., ge=0, le=100)
    sections: list[SectionProgress]
    autosave_pending: bool = False
    last_saved_at: Optional[datetime] = None


class SaveResponse(BaseModel):
    saved: bool
    last_saved_at: Optional[datetime] = None
    completion: int


class SectionView(BaseModel):
    """One wizard step with the values of the fields it owns."""

    id: str
    index: int
    title: str
    description: str
    icon: str
    fields: FieldMap
    previous_id: Optional[str] = None
    next_id: Optional[str] = None


class TimelineEntry(BaseModel):
    time: str
    event: str
    location: str = ""


class DashboardResponse(BaseModel):
    completion: int
    message: str
    celebrate: bool = Field(False, description="True once when the form first reaches 100%")
    days_until_wedding: Optional[int] = None
    timeline: list[TimelineEntry]
    sections: list[SectionProgress]
