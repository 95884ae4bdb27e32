"""
Identity module interfaces.

SessionProvider depends on IAuthBackend rather than the Supabase client,
so the state machine can be driven by a fake in tests.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import AuthIdentity, AuthSession, SessionSnapshot


@runtime_checkable
class IAuthBackend(Protocol):
    """
    Hosted auth provider operations.
    """

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Exchange credentials for a session.

        Raises:
            InvalidCredentialsError: If the provider rejects the credentials
        """
        ...

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> AuthSession:
        """
        Register a new account.

        The returned session has no access token when the provider
        requires email confirmation first.
        """
        ...

    async def get_user(self, access_token: str) -> Optional[AuthIdentity]:
        """Resolve a token to its user, or None if the token is not valid."""
        ...

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind a token."""
        ...


@runtime_checkable
class ISessionProvider(Protocol):
    """Session lifecycle as seen by the rest of the application."""

    @property
    def snapshot(self) -> SessionSnapshot:
        ...

    async def start(self, access_token: Optional[str] = None) -> SessionSnapshot:
        ...

    async def sign_in(self, email: str, password: str) -> SessionSnapshot:
        ...

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> SessionSnapshot:
        ...

    async def sign_out(self) -> SessionSnapshot:
        ...
