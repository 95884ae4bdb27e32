"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims (or the demo identity) and made
    available to route handlers via dependency injection. The access token
    is kept so that database calls can run under the user's RLS policies.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    full_name: Optional[str] = Field(None, description="Name from auth metadata")

    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    access_token: Optional[str] = Field(None, repr=False, exclude=True)
    is_demo: bool = Field(default=False, description="Synthetic demo identity")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }
