"""Authentication and user Pydantic schemas for API validation."""

from .auth import (
    AuthToken,
    LoginRequest,
    TokenPayload,
)
from .user import (
    ChangePasswordRequest,
    ConfirmUserRequest,
    RegisterRequest,
    RemoveUserRequest,
    UserResponse,
)

__all__ = [
    "AuthToken",
    "LoginRequest",
    "TokenPayload",
    "ChangePasswordRequest",
    "ConfirmUserRequest",
    "RegisterRequest",
    "RemoveUserRequest",
    "UserResponse",
]
