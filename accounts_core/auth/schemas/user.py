"""User schemas: registration, confirmation, removal and password change."""

import sqlite3
from datetime import date, datetime

from pydantic import BaseModel, Field

from ...utils import isodatetime


class RegisterRequest(BaseModel):
    """Schema for POST /user.

    Only types are checked here; password policy, email format and
    non-empty names are enforced by UserService.register so that each
    failure maps onto its own error kind.
    """

    email: str = Field(default="", description="Email address, stored lower-cased")
    password: str = Field(default="", description="Plain text password")
    first_name: str = Field(default="", description="Given name")
    last_name: str = Field(default="", description="Family name")
    dob: date | None = Field(default=None, description="Date of birth (YYYY-MM-DD)")


class ConfirmUserRequest(BaseModel):
    """Schema for POST /user/confirm."""

    email: str = Field(default="", description="Email address to look up")


class RemoveUserRequest(BaseModel):
    """Schema for DELETE /user (password re-confirmation)."""

    password: str = Field(default="", description="Current password")


class ChangePasswordRequest(BaseModel):
    """Schema for PUT /password."""

    old_password: str = Field(default="", description="Current password")
    password: str = Field(default="", description="New password")


class UserResponse(BaseModel):
    """User as returned to callers. Never carries the password hash."""

    id: str
    email: str
    first_name: str
    last_name: str
    dob: date
    created_at: datetime

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "UserResponse":
        """Build a response from a user table row."""
        return cls(
            id=row["id"],
            email=row["email"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            dob=isodatetime.to_date(row["dob"]),
            created_at=isodatetime.to_datetime(row["created_at"]),
        )
