"""Field-level validation for user data.

validate_user() returns a list of FieldViolation entries instead of raising,
so callers decide how each field maps onto an error kind. require_email()
is the raising shortcut used by login and email confirmation.
"""

import re
from datetime import date

from pydantic import BaseModel

from . import messages
from .exceptions import InvalidEmail, MissingFields

EMAIL_PATTERN = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r'@(([a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z]{2,})'
)


class FieldViolation(BaseModel):
    """A single failed constraint on a named field."""

    field: str
    message: str


def is_valid_email(email: str | None) -> bool:
    """Return True if email looks like local@host.tld."""
    return bool(email) and EMAIL_PATTERN.fullmatch(email) is not None


def require_email(email: str | None) -> str:
    """
    Check that an email was supplied and is well-formed.

    Returns:
        The email lower-cased, ready for lookup.

    Raises:
        MissingFields: If email is empty or None
        InvalidEmail: If email is malformed
    """
    if not email:
        raise MissingFields(messages.MISSING_FIELDS, {"field": "email"})
    if not is_valid_email(email):
        raise InvalidEmail(messages.INVALID_EMAIL, {"field": "email"})
    return email.lower()


def validate_user(
    email: str | None,
    first_name: str | None,
    last_name: str | None,
    dob: date | None,
) -> list[FieldViolation]:
    """
    Validate the structural fields of a new user.

    Args:
        email: Email address (already lower-cased by the caller)
        first_name: Given name, must be non-blank
        last_name: Family name, must be non-blank
        dob: Date of birth, must be present and not in the future

    Returns:
        List of violations, empty when the user is valid.
    """
    violations = []

    if not is_valid_email(email):
        violations.append(FieldViolation(field="email", message="must be a valid email address"))

    for field, value in (("first_name", first_name), ("last_name", last_name)):
        if not value or not value.strip():
            violations.append(FieldViolation(field=field, message="must not be empty"))

    if dob is None:
        violations.append(FieldViolation(field="dob", message="is required"))
    elif dob > date.today():
        violations.append(FieldViolation(field="dob", message="must not be in the future"))

    return violations
