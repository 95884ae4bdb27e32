"""
Identity module.

Sessions, profiles and route guards.

Public API:
- SessionProvider: Session state machine (with demo fallback)
- IAuthBackend: Interface for the hosted auth provider
- SupabaseAuthBackend: Supabase Auth implementation
- resolve_route: Route guard for logical frontend routes
- ensure_profile: Lazy profile creation
"""

from .interfaces import IAuthBackend, ISessionProvider
from .models import (
    SessionState,
    SessionSnapshot,
    AuthIdentity,
    AuthSession,
    SignInRequest,
    SignUpRequest,
    SessionResponse,
    RouteDecision,
)
from .exceptions import (
    InvalidCredentialsError,
    EmailConfirmationRequiredError,
    InsufficientPermissionsError,
)
from .backends import SupabaseAuthBackend
from .service import (
    SessionProvider,
    build_demo_profile,
    ensure_profile,
    get_auth_backend,
    DEMO_PROFILE_ID,
    DEMO_PROFILE_EMAIL,
    DEMO_PROFILE_NAME,
)

__all__ = [
    # Interfaces
    "IAuthBackend",
    "ISessionProvider",
    # Models
    "SessionState",
    "SessionSnapshot",
    "AuthIdentity",
    "AuthSession",
    "SignInRequest",
    "SignUpRequest",
    "SessionResponse",
    "RouteDecision",
    # Exceptions
    "InvalidCredentialsError",
    "EmailConfirmationRequiredError",
    "InsufficientPermissionsError",
    # Service
    "SupabaseAuthBackend",
    "SessionProvider",
    "build_demo_profile",
    "ensure_profile",
    "get_auth_backend",
    "DEMO_PROFILE_ID",
    "DEMO_PROFILE_EMAIL",
    "DEMO_PROFILE_NAME",
]
