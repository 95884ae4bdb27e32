"""
User-related endpoints.

Provides endpoints for the caller's own profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.identity.guards import get_current_profile
from modules.persistence.models import UserProfile
from shared.models import AuthenticatedUser
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: str
    email_verified: bool
    full_name: Optional[str] = None
    role: str
    is_demo: bool = False


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    profile: UserProfile = Depends(get_current_profile),
) -> UserProfileResponse:
    """
    Get the current user's profile, creating it on first access.

    Requires authentication (or demo mode).
    """
    return UserProfileResponse(
        id=profile.id,
        email=profile.email or user.email,
        email_verified=user.email_verified,
        full_name=profile.full_name or user.full_name,
        role=profile.role.value,
        is_demo=user.is_demo,
    )
