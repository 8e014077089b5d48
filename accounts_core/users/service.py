"""User service: registration, retrieval, removal and password change.

UserService composes validation, password hashing and the user table, and
borrows AuthService to issue tokens for newly registered users. Writes are
not committed here; callers run the service inside get_core(atomic=True).
"""

import logging

from .. import messages, validation
from ..auth import password as passwords
from ..auth.schemas import AuthToken, RegisterRequest, UserResponse
from ..auth.service import AuthService, get_auth_service
from ..db import Core, storage_errors
from ..exceptions import (
    AlreadyExists,
    GenericUpdateFailure,
    InvalidEmail,
    MissingFields,
    PasswordMismatch,
    SigningFailure,
    TokenCreationFailure,
    UserNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

NAME_FIELDS = {"first_name", "last_name"}


class UserService:
    """User lifecycle operations over a single Core."""

    def __init__(self, core: Core, auth_service: AuthService):
        self.core = core
        self.auth_service = auth_service

    def register(self, data: RegisterRequest) -> AuthToken:
        """
        Create a user and return a token pair for them.

        Order of checks: password policy, field validation, email
        uniqueness. The UNIQUE constraint on email still guards concurrent
        registrations that pass the uniqueness pre-check.

        Raises:
            PolicyViolation: If the password does not meet the policy
            HashFailure: If hashing fails
            InvalidEmail: If the email is malformed
            MissingFields: If a name is empty, or a NOT NULL column is missing
            ValidationError: If another field (dob) is invalid
            AlreadyExists: If the email is already registered
            TokenCreationFailure: If tokens cannot be signed for the new user
        """
        password_hash = passwords.hash_password(data.password)
        email = data.email.lower()

        violations = validation.validate_user(email, data.first_name, data.last_name, data.dob)
        if violations:
            details = {"errors": [v.model_dump() for v in violations]}
            fields = {v.field for v in violations}
            logger.warning(f"register(): {messages.UNABLE_TO_VALIDATE_USER} {sorted(fields)}")
            if "email" in fields:
                raise InvalidEmail(messages.EMAIL_REQUIREMENTS, details)
            if fields & NAME_FIELDS:
                raise MissingFields(messages.MISSING_FIELDS, details)
            raise ValidationError(messages.UNABLE_TO_VALIDATE_USER, details)

        with storage_errors("register"):
            existing = self.core.user.get_by_email(email)
        if existing is not None:
            logger.warning("register(): email already registered")
            raise AlreadyExists(messages.USER_ALREADY_EXISTS)

        with storage_errors("register"):
            row = self.core.user.create(
                email=email,
                password_hash=password_hash,
                first_name=data.first_name,
                last_name=data.last_name,
                dob=data.dob,
            )

        logger.info(f"register(): created user {row['id']}")

        try:
            return self.auth_service.issue_token_pair(row["id"])
        except SigningFailure as e:
            raise TokenCreationFailure(messages.UNABLE_TO_CREATE_TOKEN) from e

    def fetch(self, user_id: str) -> UserResponse:
        """Return a user without the password hash, or raise UserNotFound."""
        with storage_errors("fetch"):
            row = self.core.user.get_by_id(user_id)
        if row is None:
            raise UserNotFound(messages.USER_NOT_FOUND, {"user_id": user_id})
        return UserResponse.from_row(row)

    def confirm_by_email(self, email: str | None) -> UserResponse:
        """
        Look up a user by email for the email-confirmation flow.

        Raises:
            MissingFields: If email is empty
            InvalidEmail: If email is malformed
            UserNotFound: If no user has this email
        """
        email = validation.require_email(email)

        with storage_errors("confirm_by_email"):
            row = self.core.user.get_by_email(email)
        if row is None:
            raise UserNotFound(messages.USER_NOT_FOUND)
        return UserResponse.from_row(row)

    def remove(self, user_id: str, password: str) -> UserResponse:
        """
        Delete a user after re-confirming their password.

        Returns:
            The user as it was before deletion

        Raises:
            UserNotFound: If the user does not exist
            PasswordMismatch: If the password does not match
        """
        row = self._load_with_password(user_id, "remove")

        if not passwords.password_match(password, row["password"]):
            logger.warning(f"remove(): password mismatch for user {user_id}")
            raise PasswordMismatch(messages.PASSWORD_MISMATCH)

        with storage_errors("remove"):
            self.core.user.delete(user_id)

        logger.info(f"remove(): removed user {user_id}")
        return UserResponse.from_row(row)

    def change_password(self, user_id: str, old_password: str, new_password: str) -> UserResponse:
        """
        Replace a user's password after verifying the old one.

        Raises:
            UserNotFound: If the user does not exist
            PasswordMismatch: If the old password does not match
            PolicyViolation: If the new password does not meet the policy
            HashFailure: If hashing the new password fails
            GenericUpdateFailure: If storage reports no updated row
        """
        row = self._load_with_password(user_id, "change_password")

        if not passwords.password_match(old_password, row["password"]):
            logger.warning(f"change_password(): password mismatch for user {user_id}")
            raise PasswordMismatch(messages.PASSWORD_MISMATCH)

        new_hash = passwords.hash_password(new_password)

        with storage_errors("change_password"):
            updated = self.core.user.update_password(user_id, new_hash)

        if updated is None:
            logger.error(f"change_password(): no row updated for user {user_id}")
            raise GenericUpdateFailure(messages.GENERIC_PASSWORD_UPDATE_FAILURE)

        logger.info(f"change_password(): updated password for user {user_id}")
        return UserResponse.from_row(updated)

    def _load_with_password(self, user_id: str, operation: str):
        with storage_errors(operation):
            row = self.core.user.get_with_password(user_id)
        if row is None:
            logger.warning(f"{operation}(): no user {user_id}")
            raise UserNotFound(messages.USER_NOT_FOUND, {"user_id": user_id})
        return row


def get_user_service(core: Core) -> UserService:
    """Build a UserService (and its AuthService) around a Core."""
    return UserService(core, get_auth_service(core))
