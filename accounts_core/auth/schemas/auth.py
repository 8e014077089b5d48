"""Login and JWT schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Schema for POST /auth/login.

    Fields default to empty so the auth service reports missing values
    with its own MissingFields message.
    """

    email: str = Field(default="", description="Login email (case-insensitive)")
    password: str = Field(default="", description="Plain text password")


class AuthToken(BaseModel):
    """Bearer/refresh token pair returned on login, refresh and registration."""

    bearer_token: str = Field(..., description="Short-lived JWT for authenticated requests")
    refresh_token: str = Field(..., description="Long-lived JWT exchanged for a new pair")


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    user: str = Field(..., description="Subject user ID (UUID)")
    iat: int = Field(..., description="Issued at (unix timestamp)")
    exp: int = Field(..., description="Expires at (unix timestamp)")
