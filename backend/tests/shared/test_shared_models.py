"""Tests for shared/models.py."""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    def test_defaults(self):
        user = AuthenticatedUser(id="user-1", email="a@example.com")
        assert user.email_verified is False
        assert user.full_name is None
        assert user.is_demo is False

    def test_is_frozen(self):
        user = AuthenticatedUser(id="user-1", email="a@example.com")
        with pytest.raises(ValidationError):
            user.email = "b@example.com"

    def test_ignores_extra_claims(self):
        user = AuthenticatedUser(id="user-1", email="a@example.com", aud="authenticated")
        assert not hasattr(user, "aud")

    def test_token_is_hidden(self):
        user = AuthenticatedUser(id="user-1", email="a@example.com", access_token="secret")
        assert "secret" not in repr(user)
        assert "access_token" not in user.model_dump()
