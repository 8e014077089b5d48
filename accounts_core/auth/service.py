"""Authentication service: login, token refresh and JWT confirmation.

AuthService composes password verification, token signing and user
lookups. It is built per request around an explicit database Core and
signing secret:

    auth = AuthService(get_core(), secret=settings.auth_private_key)
    tokens = auth.login("ada@example.com", "Secret#123")

Every failure is raised as one of UserNotFound, InvalidCredentials,
MissingFields, InvalidEmail, TokenCreationFailure, ConfigurationError,
MalformedToken, TokenExpired or UnexpectedError.
"""

import logging
from datetime import timedelta

from .. import messages, validation
from ..config import settings
from ..db import Core, storage_errors
from ..exceptions import (
    InvalidCredentials,
    MissingFields,
    SigningFailure,
    TokenCreationFailure,
    UserNotFound,
)
from . import password as passwords
from . import token
from .schemas import AuthToken, TokenPayload

logger = logging.getLogger(__name__)


class AuthService:
    """Login, refresh and token confirmation over a single Core."""

    def __init__(
        self,
        core: Core,
        secret: str | None,
        bearer_expires_in: timedelta | None = None,
        refresh_expires_in: timedelta | None = None,
    ):
        """
        Args:
            core: Database Core used for user lookups
            secret: HMAC signing key; None defers a ConfigurationError to
                the first sign or verify
            bearer_expires_in: Bearer token lifetime (default from settings)
            refresh_expires_in: Refresh token lifetime (default from settings)
        """
        self.core = core
        self.secret = secret
        if bearer_expires_in is None:
            bearer_expires_in = timedelta(minutes=settings.bearer_token_expiry_minutes)
        if refresh_expires_in is None:
            refresh_expires_in = timedelta(days=settings.refresh_token_expiry_days)
        self.bearer_expires_in = bearer_expires_in
        self.refresh_expires_in = refresh_expires_in

    def is_valid_user(self, user_id: str) -> bool:
        """Return True if the user still exists in storage."""
        with storage_errors("is_valid_user"):
            exists = self.core.user.exists(user_id)
        if not exists:
            logger.warning(f"is_valid_user(): no user {user_id}")
        return exists

    def confirm_jwt(self, jwt_token: str) -> TokenPayload:
        """
        Verify a token and re-check that its subject still exists.

        A valid signature alone is not enough: removing a user invalidates
        every token issued for them, with no revocation list.

        Raises:
            ConfigurationError: If no signing key is configured
            MalformedToken: If the token is invalid
            TokenExpired: If the token has expired
            UserNotFound: If the subject user no longer exists
        """
        payload = token.decode_token(jwt_token, self.secret)

        if not self.is_valid_user(payload.user):
            raise UserNotFound(messages.USER_NOT_FOUND, {"user_id": payload.user})

        return payload

    def issue_token_pair(self, user_id: str) -> AuthToken:
        """Sign a fresh bearer/refresh pair for a user."""
        return token.issue_token_pair(
            user_id,
            self.secret,
            self.bearer_expires_in,
            self.refresh_expires_in,
        )

    def login(self, email: str, password: str) -> AuthToken:
        """
        Authenticate by email and password and issue a token pair.

        Raises:
            MissingFields: If email or password is empty
            InvalidEmail: If email is malformed
            UserNotFound: If no user has this email
            InvalidCredentials: If the password does not match
            TokenCreationFailure: If signing fails after a successful match
            ConfigurationError: If no signing key is configured
        """
        if not email or not password:
            raise MissingFields(messages.MISSING_FIELDS)
        email = validation.require_email(email)

        with storage_errors("login"):
            row = self.core.user.get_by_email_with_password(email)

        if row is None:
            logger.warning("login(): user not found")
            raise UserNotFound(messages.USER_NOT_FOUND)

        if not passwords.password_match(password, row["password"]):
            logger.warning(f"login(): invalid password for user {row['id']}")
            raise InvalidCredentials(messages.INVALID_PASSWORD)

        try:
            tokens = self.issue_token_pair(row["id"])
        except SigningFailure as e:
            logger.error(f"login(): token creation failed for user {row['id']}")
            raise TokenCreationFailure(messages.UNABLE_TO_CREATE_TOKEN) from e

        logger.info(f"login(): issued tokens for user {row['id']}")
        return tokens

    def refresh(self, user_id: str) -> AuthToken:
        """
        Issue a fresh token pair for an already-verified user.

        The caller must have passed the user's refresh token through
        confirm_jwt first; no password is required here.

        Raises:
            UserNotFound: If the user does not exist
            TokenCreationFailure: If signing fails
        """
        with storage_errors("refresh"):
            row = self.core.user.get_by_id(user_id)

        if row is None:
            logger.warning(f"refresh(): no user {user_id}")
            raise UserNotFound(messages.USER_NOT_FOUND, {"user_id": user_id})

        try:
            return self.issue_token_pair(row["id"])
        except SigningFailure as e:
            logger.error(f"refresh(): token creation failed for user {user_id}")
            raise TokenCreationFailure(messages.UNABLE_TO_CREATE_TOKEN) from e


def get_auth_service(core: Core) -> AuthService:
    """Build an AuthService using the configured signing key and expiries."""
    return AuthService(core, secret=settings.auth_private_key)
