"""
Tests for AuthService: login, refresh and JWT confirmation.

Tests verify that:
- Login issues a verifiable token pair and maps each failure to its error kind
- confirm_jwt rejects tokens whose user has been removed
- Refresh issues a new pair for an existing user
"""

from datetime import timedelta

import pytest

from accounts_core import messages
from accounts_core.auth import token
from accounts_core.auth.service import AuthService, get_auth_service
from accounts_core.config import settings
from accounts_core.exceptions import (
    ConfigurationError,
    InvalidCredentials,
    InvalidEmail,
    MalformedToken,
    MissingFields,
    SigningFailure,
    TokenCreationFailure,
    TokenExpired,
    UserNotFound,
)

PASSWORD = "Secret#123"


# ============================================================================
# Login Tests
# ============================================================================


class TestLogin:
    """Tests for AuthService.login."""

    def test_login_success(self, auth_service, registered_user):
        """Correct credentials should return a token pair for the user."""
        user, _ = registered_user

        tokens = auth_service.login("ada@example.com", PASSWORD)

        assert auth_service.confirm_jwt(tokens.bearer_token).user == user.id
        assert auth_service.confirm_jwt(tokens.refresh_token).user == user.id

    def test_login_email_is_case_insensitive(self, auth_service, registered_user):
        """Email lookup should ignore case."""
        user, _ = registered_user

        tokens = auth_service.login("Ada@Example.COM", PASSWORD)

        assert auth_service.confirm_jwt(tokens.bearer_token).user == user.id

    def test_bearer_expires_before_refresh(self, core, registered_user, signing_key):
        """Bearer lifetime should be shorter than refresh lifetime."""
        auth = AuthService(
            core,
            secret=signing_key,
            bearer_expires_in=timedelta(minutes=15),
            refresh_expires_in=timedelta(days=7),
        )

        tokens = auth.login("ada@example.com", PASSWORD)
        bearer = token.decode_token(tokens.bearer_token, signing_key)
        refresh = token.decode_token(tokens.refresh_token, signing_key)

        assert bearer.exp - bearer.iat == 15 * 60
        assert refresh.exp - refresh.iat == 7 * 24 * 60 * 60

    @pytest.mark.parametrize("email,password", [
        ("", PASSWORD),
        ("ada@example.com", ""),
        ("", ""),
        (None, PASSWORD),
    ])
    def test_login_missing_fields(self, auth_service, registered_user, email, password):
        """Empty email or password should raise MissingFields."""
        with pytest.raises(MissingFields) as exc_info:
            auth_service.login(email, password)
        assert exc_info.value.message == messages.MISSING_FIELDS

    def test_login_invalid_email(self, auth_service):
        """Malformed email should raise InvalidEmail."""
        with pytest.raises(InvalidEmail):
            auth_service.login("not-an-email", PASSWORD)

    def test_login_unknown_user(self, auth_service):
        """Unknown email should raise UserNotFound."""
        with pytest.raises(UserNotFound) as exc_info:
            auth_service.login("nobody@example.com", PASSWORD)
        assert exc_info.value.message == messages.USER_NOT_FOUND

    def test_login_wrong_password(self, auth_service, registered_user):
        """Wrong password should raise InvalidCredentials."""
        with pytest.raises(InvalidCredentials) as exc_info:
            auth_service.login("ada@example.com", "Wrong#Pass1")
        assert exc_info.value.message == messages.INVALID_PASSWORD

    def test_login_signing_failure(self, auth_service, registered_user, monkeypatch):
        """A signer failure after a password match should be TokenCreationFailure."""
        def failing_sign(*args, **kwargs):
            raise SigningFailure(messages.UNABLE_TO_ENCODE_TOKEN)

        monkeypatch.setattr(token, "sign_token", failing_sign)

        with pytest.raises(TokenCreationFailure) as exc_info:
            auth_service.login("ada@example.com", PASSWORD)
        assert exc_info.value.message == messages.UNABLE_TO_CREATE_TOKEN

    def test_login_without_secret(self, core, registered_user):
        """Missing signing key should raise ConfigurationError."""
        auth = AuthService(core, secret=None)

        with pytest.raises(ConfigurationError):
            auth.login("ada@example.com", PASSWORD)


# ============================================================================
# JWT Confirmation Tests
# ============================================================================


class TestConfirmJwt:
    """Tests for AuthService.confirm_jwt."""

    def test_confirm_valid_token(self, auth_service, registered_user):
        """Valid token for an existing user should return its payload."""
        user, tokens = registered_user

        payload = auth_service.confirm_jwt(tokens.bearer_token)

        assert payload.user == user.id

    def test_token_of_removed_user_is_rejected(self, auth_service, user_service, registered_user):
        """Removing a user should invalidate tokens issued for them."""
        user, tokens = registered_user
        user_service.remove(user.id, PASSWORD)

        with pytest.raises(UserNotFound):
            auth_service.confirm_jwt(tokens.bearer_token)
        with pytest.raises(UserNotFound):
            auth_service.confirm_jwt(tokens.refresh_token)

    def test_token_for_unknown_user_is_rejected(self, auth_service, signing_key):
        """Well-signed token for a user that never existed should be rejected."""
        jwt_token = token.sign_token("no-such-user", signing_key, timedelta(minutes=5))

        with pytest.raises(UserNotFound):
            auth_service.confirm_jwt(jwt_token)

    def test_expired_token(self, auth_service, registered_user, signing_key):
        """Expired token should raise TokenExpired."""
        user, _ = registered_user
        jwt_token = token.sign_token(user.id, signing_key, timedelta(seconds=-10))

        with pytest.raises(TokenExpired):
            auth_service.confirm_jwt(jwt_token)

    def test_malformed_token(self, auth_service):
        """Garbage should raise MalformedToken."""
        with pytest.raises(MalformedToken):
            auth_service.confirm_jwt("invalid.token.here")

    def test_token_signed_with_another_key(self, core, registered_user):
        """A token from a different key should not verify."""
        user, tokens = registered_user
        other = AuthService(core, secret="another-signing-key-that-is-32-bytes-long")

        with pytest.raises(MalformedToken):
            other.confirm_jwt(tokens.bearer_token)

    def test_is_valid_user(self, auth_service, registered_user):
        """is_valid_user should reflect storage."""
        user, _ = registered_user

        assert auth_service.is_valid_user(user.id) is True
        assert auth_service.is_valid_user("no-such-user") is False


# ============================================================================
# Refresh Tests
# ============================================================================


class TestRefresh:
    """Tests for AuthService.refresh."""

    def test_refresh_issues_new_pair(self, auth_service, registered_user):
        """Refresh should return a pair for the same user."""
        user, tokens = registered_user

        payload = auth_service.confirm_jwt(tokens.refresh_token)
        new_tokens = auth_service.refresh(payload.user)

        assert auth_service.confirm_jwt(new_tokens.bearer_token).user == user.id
        assert auth_service.confirm_jwt(new_tokens.refresh_token).user == user.id

    def test_refresh_unknown_user(self, auth_service):
        """Refreshing for a missing user should raise UserNotFound."""
        with pytest.raises(UserNotFound):
            auth_service.refresh("no-such-user")

    def test_refresh_signing_failure(self, auth_service, registered_user, monkeypatch):
        """Signer failure should be TokenCreationFailure."""
        user, _ = registered_user

        def failing_sign(*args, **kwargs):
            raise SigningFailure(messages.UNABLE_TO_ENCODE_TOKEN)

        monkeypatch.setattr(token, "sign_token", failing_sign)

        with pytest.raises(TokenCreationFailure):
            auth_service.refresh(user.id)


class TestLifetimes:
    """Tests for AuthService token lifetimes."""

    def test_explicit_zero_lifetime_is_kept(self, core, signing_key):
        """A zero lifetime is a value, not a request for the default."""
        auth = AuthService(
            core,
            secret=signing_key,
            bearer_expires_in=timedelta(0),
            refresh_expires_in=timedelta(0),
        )

        assert auth.bearer_expires_in == timedelta(0)
        assert auth.refresh_expires_in == timedelta(0)

    def test_omitted_lifetimes_use_settings(self, core, signing_key):
        """Omitted lifetimes should come from settings."""
        auth = AuthService(core, secret=signing_key)

        assert auth.bearer_expires_in == timedelta(minutes=settings.bearer_token_expiry_minutes)
        assert auth.refresh_expires_in == timedelta(days=settings.refresh_token_expiry_days)


class TestGetAuthService:
    """Tests for the get_auth_service factory."""

    def test_uses_configured_key_and_expiry(self, core, signing_key):
        """Factory should pick up the signing key and lifetimes from settings."""
        auth = get_auth_service(core)

        assert auth.secret == signing_key
        assert auth.bearer_expires_in == timedelta(minutes=settings.bearer_token_expiry_minutes)
        assert auth.refresh_expires_in == timedelta(days=settings.refresh_token_expiry_days)
