"""Tests for the session provider state machine."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.identity.exceptions import (
    EmailConfirmationRequiredError,
    InvalidCredentialsError,
)
from modules.identity.models import AuthIdentity, AuthSession, SessionState
from modules.identity.service import (
    DEMO_PROFILE_ID,
    SessionProvider,
    ensure_profile,
    get_auth_backend,
)
from modules.persistence.exceptions import BackendTransportError
from modules.persistence.models import UserProfile, UserRole
from shared.config import Settings


IDENTITY = AuthIdentity(id="user-123", email="sarah@example.com", full_name="Sarah Johnson")


def make_session(access_token="access-token"):
    return AuthSession(identity=IDENTITY, access_token=access_token, refresh_token="refresh-token")


@pytest.fixture
def gateway():
    mock = AsyncMock()
    mock.get_profile.return_value = UserProfile(id="user-123", email="sarah@example.com")
    return mock


@pytest.fixture
def auth():
    mock = AsyncMock()
    mock.sign_in.return_value = make_session()
    mock.sign_up.return_value = make_session()
    mock.get_user.return_value = IDENTITY
    return mock


@pytest.fixture
def factory(gateway):
    return MagicMock(return_value=gateway)


@pytest.fixture
def provider(auth, factory):
    return SessionProvider(auth, factory)


class TestDemoSession:
    @pytest.mark.asyncio
    async def test_every_entry_point_is_demo(self, factory):
        provider = SessionProvider(None, factory)

        for snapshot in (
            await provider.start(),
            await provider.sign_in("a@example.com", "pw"),
            await provider.sign_up("a@example.com", "password"),
        ):
            assert snapshot.state == SessionState.DEMO
            assert snapshot.profile.id == DEMO_PROFILE_ID
            assert snapshot.is_signed_in
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_demo_role(self, factory):
        provider = SessionProvider(None, factory, demo_role="admin")
        snapshot = await provider.start()
        assert snapshot.is_admin

    @pytest.mark.asyncio
    async def test_sign_out_then_start_returns_to_demo(self, factory):
        provider = SessionProvider(None, factory)
        await provider.start()

        assert (await provider.sign_out()).state == SessionState.UNAUTHENTICATED
        assert (await provider.start()).state == SessionState.DEMO


class TestStart:
    @pytest.mark.asyncio
    async def test_valid_token_authenticates(self, provider, auth, factory):
        snapshot = await provider.start("access-token")

        auth.get_user.assert_awaited_once_with("access-token")
        factory.assert_called_once_with("access-token")
        assert snapshot.state == SessionState.AUTHENTICATED
        assert snapshot.profile.id == "user-123"
        assert snapshot.access_token == "access-token"

    @pytest.mark.asyncio
    async def test_no_token_is_unauthenticated(self, provider, auth):
        snapshot = await provider.start()

        assert snapshot.state == SessionState.UNAUTHENTICATED
        auth.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_token_is_unauthenticated(self, provider, auth):
        auth.get_user.return_value = None
        assert (await provider.start("stale")).state == SessionState.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_session_check_failure_is_unauthenticated(self, provider, auth):
        auth.get_user.side_effect = BackendTransportError("offline")
        assert (await provider.start("token")).state == SessionState.UNAUTHENTICATED


class TestSignIn:
    @pytest.mark.asyncio
    async def test_success(self, provider):
        snapshot = await provider.sign_in("sarah@example.com", "secret")

        assert snapshot.state == SessionState.AUTHENTICATED
        assert provider.refresh_token == "refresh-token"

    @pytest.mark.asyncio
    async def test_rejected_credentials(self, provider, auth):
        auth.sign_in.side_effect = InvalidCredentialsError()

        with pytest.raises(InvalidCredentialsError):
            await provider.sign_in("sarah@example.com", "wrong")
        assert provider.snapshot.state == SessionState.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_profile_failure_still_authenticates(self, provider, gateway):
        gateway.get_profile.side_effect = BackendTransportError("offline")

        snapshot = await provider.sign_in("sarah@example.com", "secret")

        assert snapshot.state == SessionState.AUTHENTICATED
        assert snapshot.profile is None
        assert not snapshot.is_admin


class TestSignUp:
    @pytest.mark.asyncio
    async def test_success(self, provider, auth):
        snapshot = await provider.sign_up("sarah@example.com", "secret", "Sarah Johnson")

        auth.sign_up.assert_awaited_once_with("sarah@example.com", "secret", "Sarah Johnson")
        assert snapshot.state == SessionState.AUTHENTICATED

    @pytest.mark.asyncio
    async def test_confirmation_required(self, provider, auth):
        auth.sign_up.return_value = make_session(access_token=None)

        with pytest.raises(EmailConfirmationRequiredError):
            await provider.sign_up("sarah@example.com", "secret")
        assert provider.snapshot.state == SessionState.UNAUTHENTICATED


class TestSignOut:
    @pytest.mark.asyncio
    async def test_revokes_token(self, provider, auth):
        await provider.sign_in("sarah@example.com", "secret")
        snapshot = await provider.sign_out()

        auth.sign_out.assert_awaited_once_with("access-token")
        assert snapshot.state == SessionState.UNAUTHENTICATED
        assert provider.refresh_token is None

    @pytest.mark.asyncio
    async def test_provider_failure_still_signs_out(self, provider, auth):
        await provider.sign_in("sarah@example.com", "secret")
        auth.sign_out.side_effect = BackendTransportError("offline")

        assert (await provider.sign_out()).state == SessionState.UNAUTHENTICATED


class TestEnsureProfile:
    @pytest.mark.asyncio
    async def test_existing_profile(self, gateway):
        profile = await ensure_profile(gateway, IDENTITY)

        assert profile.id == "user-123"
        gateway.create_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_creates_client_profile(self, gateway):
        gateway.get_profile.return_value = None
        gateway.create_profile.return_value = UserProfile(id="user-123")

        await ensure_profile(gateway, IDENTITY)

        data = gateway.create_profile.call_args.args[0]
        assert data == {
            "id": "user-123",
            "email": "sarah@example.com",
            "full_name": "Sarah Johnson",
            "role": UserRole.CLIENT.value,
        }


class TestGetAuthBackend:
    def test_none_when_unconfigured(self):
        assert get_auth_backend(Settings()) is None

    def test_supabase_when_configured(self):
        settings = Settings(supabase_url="https://abc.supabase.co", supabase_anon_key="anon")
        assert get_auth_backend(settings) is not None
