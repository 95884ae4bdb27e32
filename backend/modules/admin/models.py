"""
Admin dashboard models.
"""

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Headline numbers for the admin console."""

    total_clients: int = Field(0, ge=0)
    completed_forms: int = Field(0, ge=0, description="Clients whose form is 100% complete")
    upcoming_meetings: int = Field(0, ge=0)
    pending_emails: int = Field(0, ge=0, description="Scheduled emails not yet sent")
