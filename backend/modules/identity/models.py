"""
Identity module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from modules.persistence.models import UserProfile


class SessionState(str, Enum):
    """Where a session is in its lifecycle."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    DEMO = "demo"


class SessionSnapshot(BaseModel):
    """
    Immutable view of a session at one point in time.

    `profile` is set in the authenticated and demo states. An
    authenticated session can still carry no profile when the profile
    lookup failed.
    """

    state: SessionState = SessionState.UNAUTHENTICATED
    profile: Optional[UserProfile] = None
    access_token: Optional[str] = Field(None, repr=False)

    model_config = {"frozen": True}

    @property
    def is_signed_in(self) -> bool:
        return self.state in (SessionState.AUTHENTICATED, SessionState.DEMO)

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.is_admin


class AuthIdentity(BaseModel):
    """User as reported by the auth provider."""

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None


class AuthSession(BaseModel):
    """Tokens issued by the auth provider after sign-in or sign-up."""

    identity: AuthIdentity
    access_token: Optional[str] = Field(None, repr=False)
    refresh_token: Optional[str] = Field(None, repr=False)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = Field(None, max_length=200)


class SessionResponse(BaseModel):
    """Session as returned by the auth endpoints."""

    state: SessionState
    profile: Optional[UserProfile] = None
    is_admin: bool = False
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @classmethod
    def from_snapshot(
        cls, snapshot: SessionSnapshot, refresh_token: Optional[str] = None
    ) -> "SessionResponse":
        return cls(
            state=snapshot.state,
            profile=snapshot.profile,
            is_admin=snapshot.is_admin,
            access_token=snapshot.access_token,
            refresh_token=refresh_token,
        )


class RouteDecision(BaseModel):
    """Outcome of checking a logical route against a session."""

    path: str
    allowed: bool
    redirect_to: Optional[str] = None
    reason: Optional[str] = None
