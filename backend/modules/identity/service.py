"""
Session provider.

Drives the session state machine:

    unauthenticated -> authenticating -> authenticated
                                      -> unauthenticated (failure)
    any -> unauthenticated (sign-out)

Without a configured auth backend every entry point goes straight to the
demo state with a fixed profile and makes no network calls.
"""

import logging
from typing import Callable, Optional

from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import UserProfile, UserRole
from shared.config import Settings, get_settings
from shared.exceptions import PortalError

from .backends import SupabaseAuthBackend
from .exceptions import EmailConfirmationRequiredError
from .interfaces import IAuthBackend
from .models import AuthIdentity, AuthSession, SessionSnapshot, SessionState

logger = logging.getLogger(__name__)

DEMO_PROFILE_ID = "demo-user-id"
DEMO_PROFILE_EMAIL = "demo@example.com"
DEMO_PROFILE_NAME = "Demo User"

GatewayFactory = Callable[[Optional[str]], IPersistenceBackend]


def build_demo_profile(role: str = UserRole.CLIENT.value) -> UserProfile:
    """The fabricated profile used while no backend is configured."""
    return UserProfile(
        id=DEMO_PROFILE_ID,
        email=DEMO_PROFILE_EMAIL,
        full_name=DEMO_PROFILE_NAME,
        role=UserRole(role),
    )


async def ensure_profile(gateway: IPersistenceBackend, identity: AuthIdentity) -> UserProfile:
    """
    Get the identity's profile, creating a client profile on first access.

    New profiles always get the client role; only an admin can promote one.
    """
    profile = await gateway.get_profile(identity.id)
    if profile is not None:
        return profile

    logger.info(f"Creating profile for new user {identity.id}")
    return await gateway.create_profile(
        {
            "id": identity.id,
            "email": identity.email,
            "full_name": identity.full_name,
            "role": UserRole.CLIENT.value,
        }
    )


class SessionProvider:
    """
    Session state machine for one caller.

    Args:
        auth: Auth backend, or None when no backend is configured (demo)
        gateway_factory: Builds a persistence gateway for an access token
        demo_role: Role given to the demo profile
    """

    def __init__(
        self,
        auth: Optional[IAuthBackend],
        gateway_factory: GatewayFactory,
        demo_role: str = UserRole.CLIENT.value,
    ):
        self._auth = auth
        self._gateway_factory = gateway_factory
        self._demo_role = demo_role
        self._snapshot = SessionSnapshot()
        self._refresh_token: Optional[str] = None

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    @property
    def is_demo(self) -> bool:
        return self._auth is None

    async def start(self, access_token: Optional[str] = None) -> SessionSnapshot:
        """
        Resolve an existing session from a token.

        An unknown or missing token leaves the session unauthenticated.
        """
        if self._auth is None:
            return self._enter_demo()

        self._transition(SessionState.AUTHENTICATING)
        if not access_token:
            return self._transition(SessionState.UNAUTHENTICATED)

        try:
            identity = await self._auth.get_user(access_token)
        except PortalError as e:
            logger.error(f"Session check failed: {e.message}")
            return self._transition(SessionState.UNAUTHENTICATED)

        if identity is None:
            return self._transition(SessionState.UNAUTHENTICATED)
        return await self._authenticate(identity, access_token)

    async def sign_in(self, email: str, password: str) -> SessionSnapshot:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
        """
        if self._auth is None:
            logger.warning("Demo mode: email sign-in not available")
            return self._enter_demo()

        self._transition(SessionState.AUTHENTICATING)
        try:
            session = await self._auth.sign_in(email, password)
        except PortalError:
            self._transition(SessionState.UNAUTHENTICATED)
            raise
        return await self._open(session)

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> SessionSnapshot:
        """
        Register and sign in.

        Raises:
            InvalidCredentialsError: If the provider refuses the sign-up
            EmailConfirmationRequiredError: If the account must be confirmed first
        """
        if self._auth is None:
            logger.warning("Demo mode: sign-up not available")
            return self._enter_demo()

        self._transition(SessionState.AUTHENTICATING)
        try:
            session = await self._auth.sign_up(email, password, full_name)
        except PortalError:
            self._transition(SessionState.UNAUTHENTICATED)
            raise

        if not session.access_token:
            self._transition(SessionState.UNAUTHENTICATED)
            raise EmailConfirmationRequiredError(email)
        return await self._open(session)

    async def sign_out(self) -> SessionSnapshot:
        """End the session. Always lands in unauthenticated."""
        token = self._snapshot.access_token
        if self._auth is not None and token:
            try:
                await self._auth.sign_out(token)
            except PortalError as e:
                logger.error(f"Sign-out failed at the auth provider: {e.message}")

        self._refresh_token = None
        self._snapshot = SessionSnapshot(state=SessionState.UNAUTHENTICATED)
        return self._snapshot

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _open(self, session: AuthSession) -> SessionSnapshot:
        self._refresh_token = session.refresh_token
        return await self._authenticate(session.identity, session.access_token)

    async def _authenticate(self, identity: AuthIdentity, access_token: str) -> SessionSnapshot:
        profile: Optional[UserProfile] = None
        try:
            profile = await ensure_profile(self._gateway_factory(access_token), identity)
        except PortalError as e:
            logger.error(f"Profile lookup failed for {identity.id}: {e.message}")

        self._snapshot = SessionSnapshot(
            state=SessionState.AUTHENTICATED,
            profile=profile,
            access_token=access_token,
        )
        return self._snapshot

    def _enter_demo(self) -> SessionSnapshot:
        self._snapshot = SessionSnapshot(
            state=SessionState.DEMO,
            profile=build_demo_profile(self._demo_role),
        )
        return self._snapshot

    def _transition(self, state: SessionState) -> SessionSnapshot:
        self._snapshot = SessionSnapshot(state=state)
        return self._snapshot


def get_auth_backend(settings: Optional[Settings] = None) -> Optional[IAuthBackend]:
    """Supabase auth when configured, None (demo) otherwise."""
    settings = settings or get_settings()
    if not settings.backend_configured:
        return None
    return SupabaseAuthBackend()
