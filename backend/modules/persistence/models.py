"""
Persisted entity models.

Every entity the portal stores lives here, since the persistence gateway
owns all of them. Other modules import these models and define their own
request/response models on top.
"""

from datetime import date as date_type, datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field


FieldValue = Union[str, bool, int, float]
# Stored rows may carry nulls; the form store never loads them.
FieldMap = dict[str, Optional[FieldValue]]


class UserRole(str, Enum):
    """Role stored on a profile."""

    CLIENT = "client"
    ADMIN = "admin"


class UserProfile(BaseModel):
    """Identity record from the profiles table."""

    id: str = Field(..., description="User ID (UUID from Supabase Auth)")
    email: Optional[str] = Field(None, description="Email address")
    full_name: Optional[str] = Field(None, description="Display name")
    phone: Optional[str] = Field(None, description="Phone number")
    role: UserRole = Field(default=UserRole.CLIENT, description="Portal role")
    created_at: Optional[datetime] = Field(None, description="Profile creation time")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class WeddingForm(BaseModel):
    """One client's wedding-details answers (one row per user)."""

    id: Optional[str] = None
    user_id: str
    form_data: FieldMap = Field(default_factory=dict)
    updated_at: Optional[datetime] = None


class ClientRecord(UserProfile):
    """A client profile joined with its wedding form, for admin screens."""

    wedding_form: Optional[WeddingForm] = None

    @property
    def form_data(self) -> FieldMap:
        return self.wedding_form.form_data if self.wedding_form else {}


# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------


class EmailTemplate(BaseModel):
    """Email body/subject with {{placeholder}} merge tokens."""

    id: str
    name: str
    subject: str = ""
    template: str = ""
    type: str = "custom"
    created_at: Optional[datetime] = None


class ScheduledEmailStatus(str, Enum):
    SCHEDULED = "scheduled"
    SENT = "sent"
    CANCELLED = "cancelled"


class ScheduledEmail(BaseModel):
    """A template queued for sending to a set of clients."""

    id: str
    template_id: Optional[str] = None
    template_name: Optional[str] = None
    client_ids: list[str] = Field(default_factory=list)
    recipient_count: int = 0
    scheduled_for: datetime
    status: ScheduledEmailStatus = ScheduledEmailStatus.SCHEDULED


# ---------------------------------------------------------------------------
# FAQ
# ---------------------------------------------------------------------------


class FAQItem(BaseModel):
    question: str
    answer: str


class FAQSet(BaseModel):
    """Named group of questions and answers that can be sent to clients."""

    id: str
    name: str
    description: str = ""
    category: str = "general"
    faqs: list[FAQItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class FAQNotification(BaseModel):
    """Record of a FAQ set having been sent to a client."""

    id: Optional[str] = None
    faq_set_id: str
    client_id: str
    sent_at: datetime
    status: str = "sent"


# ---------------------------------------------------------------------------
# Custom forms
# ---------------------------------------------------------------------------


class CustomFormField(BaseModel):
    type: str = "text"
    label: str = ""
    placeholder: str = ""
    required: bool = False
    options: list[str] = Field(default_factory=list)


class CustomForm(BaseModel):
    """Admin-authored intake form definition."""

    id: str
    name: str
    description: str = ""
    category: str = "supplier"
    fields: list[CustomFormField] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class FormRequestStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class FormRequest(BaseModel):
    """Delivery of a custom form to one client."""

    id: str
    form_id: Optional[str] = None
    client_id: Optional[str] = None
    form_name: Optional[str] = None
    client_name: Optional[str] = None
    status: FormRequestStatus = FormRequestStatus.PENDING
    sent_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Meetings
# ---------------------------------------------------------------------------


class AvailabilitySlot(BaseModel):
    id: str
    date: date_type
    start_time: str
    end_time: str
    duration: int = 60
    meeting_type: str = "consultation"
    is_booked: bool = False


class Meeting(BaseModel):
    id: str
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    meeting_type: str = "consultation"
    scheduled_for: datetime
    meet_id: Optional[str] = None
    zoom_link: Optional[str] = None
    status: str = "scheduled"


class IntegrationSettings(BaseModel):
    """Calendar/video integration toggles stored in admin_settings."""

    google_calendar_enabled: bool = False
    zoom_enabled: bool = False
    meet_enabled: bool = True
    default_duration: int = 60
    buffer_time: int = 15
