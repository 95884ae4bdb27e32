"""
Route guards.

`resolve_route` answers, for a logical frontend route, whether the
session may open it and where to send it otherwise. The FastAPI
dependencies below apply the same rules to API calls.
"""

import logging

from fastapi import Depends

from api.dependencies import get_gateway
from api.middleware.auth import get_current_user
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import UserProfile, UserRole
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .exceptions import InsufficientPermissionsError
from .models import AuthIdentity, RouteDecision, SessionSnapshot
from .service import build_demo_profile, ensure_profile

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
CLIENT_HOME = "/client"
ADMIN_HOME = "/admin/dashboard"

PUBLIC_ROUTES = {"/", LOGIN_PATH}
CLIENT_ROUTES = {CLIENT_HOME, "/form"}
ADMIN_SECTIONS = ("dashboard", "clients", "emails", "faqs", "meetings", "forms")


def _normalize(path: str) -> str:
    path = path.split("?", 1)[0]
    return "/" + path.strip().strip("/")


def resolve_route(path: str, snapshot: SessionSnapshot) -> RouteDecision:
    """
    Decide whether `snapshot` may open `path`.

    Unauthenticated sessions are sent to the login page from any
    protected route; non-admins are kept out of the admin console.
    """
    path = _normalize(path)

    if path in PUBLIC_ROUTES:
        if path == LOGIN_PATH and snapshot.is_signed_in:
            return RouteDecision(path=path, allowed=False, redirect_to=CLIENT_HOME,
                                 reason="already signed in")
        return RouteDecision(path=path, allowed=True)

    parts = path.strip("/").split("/")
    root = "/" + parts[0]

    if path in CLIENT_ROUTES or (root == "/form" and len(parts) == 2):
        if not snapshot.is_signed_in:
            return RouteDecision(path=path, allowed=False, redirect_to=LOGIN_PATH,
                                 reason="authentication required")
        return RouteDecision(path=path, allowed=True)

    if root == "/admin" and len(parts) <= 2:
        if not snapshot.is_signed_in:
            return RouteDecision(path=path, allowed=False, redirect_to=LOGIN_PATH,
                                 reason="authentication required")
        if not snapshot.is_admin:
            return RouteDecision(path=path, allowed=False, redirect_to=CLIENT_HOME,
                                 reason="admin access required")
        if len(parts) == 2 and parts[1] not in ADMIN_SECTIONS:
            return RouteDecision(path=path, allowed=False, redirect_to=ADMIN_HOME,
                                 reason="unknown admin section")
        return RouteDecision(path=path, allowed=True)

    return RouteDecision(path=path, allowed=False, redirect_to="/", reason="unknown route")


async def get_current_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    gateway: IPersistenceBackend = Depends(get_gateway),
) -> UserProfile:
    """
    Dependency returning the caller's profile, created on first access.
    """
    if user.is_demo:
        return build_demo_profile(get_settings().demo_role)

    return await ensure_profile(
        gateway,
        AuthIdentity(id=user.id, email=user.email, full_name=user.full_name),
    )


async def require_admin(
    profile: UserProfile = Depends(get_current_profile),
) -> UserProfile:
    """
    Dependency that only lets admins through.

    The backend's row-level security is still the real boundary; this
    only spares non-admins a round of empty results.
    """
    if not profile.is_admin:
        logger.info(f"Admin access denied for {profile.id}")
        raise InsufficientPermissionsError(UserRole.ADMIN.value, profile.role.value)
    return profile
