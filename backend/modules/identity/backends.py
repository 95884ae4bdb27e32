"""
Supabase Auth backend.

supabase-py keeps the signed-in session on the client object, so every
call gets a fresh anon client and nothing leaks between users sharing
the API process.
"""

import logging
from typing import Callable, Optional

from supabase import AuthApiError, AuthError, Client

from modules.persistence.exceptions import BackendTransportError
from shared.database import get_supabase_anon_client

from .exceptions import InvalidCredentialsError
from .models import AuthIdentity, AuthSession

logger = logging.getLogger(__name__)


def _to_identity(user) -> AuthIdentity:
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthIdentity(
        id=user.id,
        email=user.email,
        full_name=metadata.get("full_name"),
    )


class SupabaseAuthBackend:
    """IAuthBackend over Supabase Auth (GoTrue)."""

    def __init__(self, client_factory: Callable[[], Client] = get_supabase_anon_client):
        self._client_factory = client_factory

    async def sign_in(self, email: str, password: str) -> AuthSession:
        client = self._client_factory()
        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthApiError as e:
            logger.info(f"Sign-in rejected for {email}: {e}")
            raise InvalidCredentialsError()
        except AuthError as e:
            raise BackendTransportError("auth sign-in failed", str(e))

        if response.user is None or response.session is None:
            raise InvalidCredentialsError()
        return AuthSession(
            identity=_to_identity(response.user),
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
        )

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> AuthSession:
        client = self._client_factory()
        try:
            response = client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": full_name} if full_name else {}},
                }
            )
        except AuthApiError as e:
            raise InvalidCredentialsError(str(e))
        except AuthError as e:
            raise BackendTransportError("auth sign-up failed", str(e))

        if response.user is None:
            raise InvalidCredentialsError("Sign-up was not accepted")
        session = response.session
        return AuthSession(
            identity=_to_identity(response.user),
            access_token=session.access_token if session else None,
            refresh_token=session.refresh_token if session else None,
        )

    async def get_user(self, access_token: str) -> Optional[AuthIdentity]:
        client = self._client_factory()
        try:
            response = client.auth.get_user(access_token)
        except AuthApiError:
            return None
        except AuthError as e:
            raise BackendTransportError("auth session check failed", str(e))

        if response is None or response.user is None:
            return None
        return _to_identity(response.user)

    async def sign_out(self, access_token: str) -> None:
        client = self._client_factory()
        try:
            client.auth.admin.sign_out(access_token)
        except AuthError as e:
            raise BackendTransportError("auth sign-out failed", str(e))
