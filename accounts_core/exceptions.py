"""Custom exceptions for Accounts Core.

The hierarchy is closed: every failure a service reports is one of the
classes below. Category bases (ResourceNotFound, BadRequest, Conflict,
AuthenticationError) decide the HTTP status in main.py; anything else
deriving directly from AccountsError is rendered as a 500.
"""


class AccountsError(Exception):
    """Base exception for all Accounts Core errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# 404
# ============================================================================


class ResourceNotFound(AccountsError):
    """Raised when a requested resource does not exist."""
    pass


class UserNotFound(ResourceNotFound):
    """Raised when no user matches the given id or email."""
    pass


# ============================================================================
# 400
# ============================================================================


class BadRequest(AccountsError):
    """Raised when the caller supplied data that cannot be acted upon."""
    pass


class ValidationError(BadRequest):
    """Raised when data validation fails."""
    pass


class MissingFields(ValidationError):
    """Raised when required fields are absent or empty."""
    pass


class InvalidEmail(ValidationError):
    """Raised when an email address is not well-formed."""
    pass


class PolicyViolation(ValidationError):
    """Raised when a password does not satisfy the password policy."""
    pass


class InvalidCredentials(BadRequest):
    """Raised when a password does not match the stored hash at login."""
    pass


class PasswordMismatch(BadRequest):
    """Raised when password re-confirmation fails for remove or change."""
    pass


class MalformedToken(BadRequest):
    """Raised when a token fails to decode or its signature is invalid."""
    pass


# ============================================================================
# 409
# ============================================================================


class Conflict(AccountsError):
    """Raised when the request conflicts with existing state."""
    pass


class AlreadyExists(Conflict):
    """Raised when registering an email that is already taken."""
    pass


# ============================================================================
# 401
# ============================================================================


class AuthenticationError(AccountsError):
    """Raised when authentication is missing or rejected."""
    pass


class TokenExpired(AuthenticationError):
    """Raised when a token's exp claim is in the past."""
    pass


# ============================================================================
# 500
# ============================================================================


class HashFailure(AccountsError):
    """Raised when the password hasher fails on a policy-conforming password."""
    pass


class SigningFailure(AccountsError):
    """Raised when the JWT signer errors or produces an empty token."""
    pass


class TokenCreationFailure(AccountsError):
    """Raised when a token pair cannot be issued after successful login."""
    pass


class ConfigurationError(AccountsError):
    """Raised when required configuration (e.g. the signing key) is missing."""
    pass


class GenericUpdateFailure(AccountsError):
    """Raised when an update reports no affected row."""
    pass


class UnexpectedError(AccountsError):
    """Raised for failures outside the known categories."""
    pass
