"""Password policy, Argon2id hashing and verification.

Hashes are produced by argon2-cffi's PasswordHasher using the Argon2id
variant with a fixed memory cost of 16384 KiB.
"""

import logging
import re

from argon2 import PasswordHasher, Type
from argon2.exceptions import HashingError, VerificationError, VerifyMismatchError, InvalidHashError

from .. import messages
from ..exceptions import HashFailure, InvalidCredentials, PolicyViolation

logger = logging.getLogger(__name__)

MEMORY_COST = 16384
MIN_LENGTH = 8
MAX_LENGTH = 32
SPECIAL_CHARACTERS = "!@#$%^&*()-+="

_special = re.escape(SPECIAL_CHARACTERS)
PASSWORD_PATTERN = re.compile(
    rf"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[{_special}])"
    rf"[A-Za-z0-9{_special}]{{{MIN_LENGTH},{MAX_LENGTH}}}"
)

_hasher = PasswordHasher(memory_cost=MEMORY_COST, type=Type.ID)


def meets_policy(password: str | None) -> bool:
    """
    Check a password against the password policy.

    The password must:
    - be 8 to 32 characters long
    - contain at least one lowercase letter, one uppercase letter and one digit
    - contain at least one of !@#$%^&*()-+=
    - contain nothing else (in particular, no whitespace)
    """
    return bool(password) and PASSWORD_PATTERN.fullmatch(password) is not None


def hash_password(password: str | None) -> str:
    """
    Enforce the password policy and hash the password with Argon2id.

    Args:
        password: Plain text password

    Returns:
        Encoded Argon2id hash string ($argon2id$...)

    Raises:
        PolicyViolation: If the password does not meet the policy
        HashFailure: If the hasher itself fails
    """
    if not meets_policy(password):
        logger.warning("Unable to hash password: policy not met")
        raise PolicyViolation(messages.PASSWORD_REQUIREMENTS)

    try:
        return _hasher.hash(password)
    except HashingError as e:
        logger.error(f"Unable to hash password: {e}")
        raise HashFailure(messages.UNABLE_TO_HASH_PASSWORD) from e


def password_match(plaintext: str, hashed: str) -> bool:
    """
    Verify a plain text password against a stored Argon2id hash.

    Args:
        plaintext: Password supplied by the caller
        hashed: Hash read from the user table

    Returns:
        True if the password matches, False if it does not

    Raises:
        InvalidCredentials: If the verifier fails for any other reason
            (corrupt hash, unsupported parameters), so callers cannot tell
            engine faults apart from bad passwords
    """
    try:
        return _hasher.verify(hashed, plaintext)
    except VerifyMismatchError:
        return False
    except (VerificationError, InvalidHashError) as e:
        logger.error(f"Password verification failed: {e}")
        raise InvalidCredentials(messages.INVALID_PASSWORD) from e
