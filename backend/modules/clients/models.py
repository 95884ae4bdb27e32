"""
Client management models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from modules.persistence.models import ClientRecord, UserRole
from modules.forms.completion import calculate_completion_percentage


class ClientSummary(BaseModel):
    """One row of the admin client list."""

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    bride_name: str = ""
    groom_name: str = ""
    wedding_date: str = ""
    venue_name: str = ""
    completion: int = Field(0, ge=0, le=100)
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: ClientRecord) -> "ClientSummary":
        form_data = record.form_data
        return cls(
            id=record.id,
            email=record.email,
            full_name=record.full_name,
            phone=record.phone,
            bride_name=str(form_data.get("bride_name") or ""),
            groom_name=str(form_data.get("groom_name") or ""),
            wedding_date=str(form_data.get("wedding_date") or ""),
            venue_name=str(form_data.get("venue_name") or ""),
            completion=calculate_completion_percentage(form_data),
            created_at=record.created_at,
        )


class ClientListResponse(BaseModel):
    clients: list[ClientSummary]
    total: int


class CreateClientRequest(BaseModel):
    """New client added by an admin."""

    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = None
    bride_name: str = ""
    groom_name: str = ""
    wedding_date: str = ""
    venue_name: str = ""

    @property
    def has_wedding_details(self) -> bool:
        return bool(self.bride_name or self.groom_name or self.wedding_date)


class UpdateClientRequest(BaseModel):
    """Partial profile update. Only an admin can change a role."""

    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = None
    role: Optional[UserRole] = None
