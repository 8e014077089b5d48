"""
JWT token signing, decoding and introspection.

Tokens are HS256-signed and carry the claims:
- user: subject user ID (UUID)
- iat: issued at (unix timestamp)
- exp: expires at (unix timestamp)

Bearer and refresh tokens share this format and differ only in expiry.
Decoding here is purely cryptographic; the user-existence re-check that
makes a token acceptable lives in AuthService.confirm_jwt.
"""

import logging
from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from .. import messages
from ..exceptions import ConfigurationError, MalformedToken, SigningFailure, TokenExpired
from ..utils import isodatetime
from .schemas import AuthToken, TokenPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["user", "iat", "exp"]


def _require_secret(secret: str | None) -> str:
    if not secret:
        logger.error("JWT signing key is not configured")
        raise ConfigurationError(messages.MISSING_SIGNING_KEY)
    return secret


def sign_token(user_id: str, secret: str | None, expires_in: timedelta) -> str:
    """
    Sign a token for a user.

    Args:
        user_id: Subject user ID
        secret: HMAC signing key
        expires_in: Lifetime of the token (negative values produce an
            already-expired token)

    Returns:
        Encoded JWT string

    Raises:
        ConfigurationError: If no signing key is configured
        SigningFailure: If the signer errors or returns an empty token
    """
    secret = _require_secret(secret)
    now_ts = isodatetime.now_unix()
    payload = {
        "user": user_id,
        "iat": now_ts,
        "exp": now_ts + int(expires_in.total_seconds()),
    }

    try:
        encoded = jwt.encode(payload, secret, algorithm=ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        logger.error(f"Unable to sign token: {e}")
        raise SigningFailure(messages.UNABLE_TO_ENCODE_TOKEN) from e

    if not encoded:
        logger.error("Signer returned an empty token")
        raise SigningFailure(messages.UNABLE_TO_ENCODE_TOKEN)

    return encoded


def issue_token_pair(
    user_id: str,
    secret: str | None,
    bearer_expires_in: timedelta,
    refresh_expires_in: timedelta,
) -> AuthToken:
    """Sign a bearer and a refresh token for the same subject."""
    return AuthToken(
        bearer_token=sign_token(user_id, secret, bearer_expires_in),
        refresh_token=sign_token(user_id, secret, refresh_expires_in),
    )


def decode_token(token: str, secret: str | None) -> TokenPayload:
    """
    Verify a token's signature and expiry and decode its claims.

    Args:
        token: Encoded JWT string
        secret: HMAC signing key

    Returns:
        TokenPayload with user, iat and exp

    Raises:
        ConfigurationError: If no signing key is configured
        TokenExpired: If the exp claim is in the past
        MalformedToken: If the token cannot be decoded, its signature is
            invalid, or a required claim is missing or mistyped
    """
    secret = _require_secret(secret)

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired(messages.EXPIRED_TOKEN) from e
    except jwt.InvalidTokenError as e:
        raise MalformedToken(messages.MALFORMED_TOKEN, {"reason": str(e)}) from e

    try:
        return TokenPayload(**payload)
    except PydanticValidationError as e:
        raise MalformedToken(messages.MALFORMED_TOKEN, {"reason": str(e)}) from e


# ============================================================================
# Introspection (no existence check)
# ============================================================================


def decode_token_no_validation(token: str) -> dict:
    """
    Decode a token WITHOUT verifying signature or expiry.

    For logging and debugging only. Never trust the result for
    authentication.
    """
    return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})


def get_token_expiry_remaining(token: str, secret: str | None) -> timedelta | None:
    """
    Get time remaining until a token expires.

    Returns:
        Remaining lifetime, or None if the token is invalid or expired
    """
    try:
        payload = decode_token(token, secret)
    except (MalformedToken, TokenExpired):
        return None

    return timedelta(seconds=payload.exp - isodatetime.now_unix())


def is_token_expired(token: str, secret: str | None) -> bool:
    """Return True if the token is expired or invalid."""
    return get_token_expiry_remaining(token, secret) is None
