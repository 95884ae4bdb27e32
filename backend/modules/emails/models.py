"""
Email management request/response models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .dispatcher import DispatchResult


class EmailTemplateRequest(BaseModel):
    """Create a template."""

    name: str = Field(..., min_length=1, max_length=200)
    subject: str = ""
    template: str = ""
    type: str = "custom"


class EmailTemplateUpdate(BaseModel):
    """Partial template update."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    subject: Optional[str] = None
    template: Optional[str] = None
    type: Optional[str] = None


class EmailPreview(BaseModel):
    """A template merged for one client."""

    template_id: str
    client_id: str
    recipient: Optional[str] = None
    subject: str
    body: str


class SendEmailRequest(BaseModel):
    template_id: str
    client_ids: list[str] = Field(..., min_length=1)


class SendEmailResponse(BaseModel):
    sent: int
    results: list[DispatchResult]
    skipped: list[str] = Field(default_factory=list, description="Client IDs without an email address")


class ScheduleEmailRequest(BaseModel):
    template_id: str
    client_ids: list[str] = Field(..., min_length=1)
    scheduled_for: datetime
