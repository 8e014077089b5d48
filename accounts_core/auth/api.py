"""Authentication API endpoints for Accounts Core.

- POST /auth/login   - Exchange email + password for a token pair
- POST /auth/verify  - Check that a bearer token is still valid
- POST /auth/refresh - Exchange a refresh token for a new token pair

All endpoints return the JSON envelope from api.responses.
"""

import logging

from flask import Blueprint

from ..api.responses import success
from ..api.validation import validate_request
from ..db import get_core
from .decorators import auth_required, bearer_token_from_request
from .schemas import LoginRequest
from .service import get_auth_service

logger = logging.getLogger(__name__)


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/auth/login")
@validate_request
def login(data: LoginRequest):
    """
    Authenticate user and return a token pair.

    Example request:
    ```json
    {"email": "ada@example.com", "password": "Secret#123"}
    ```

    Example response:
    ```json
    {
        "data": {
            "bearer_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
        },
        "correlation_id": "4f1c..."
    }
    ```

    Errors: 400 (missing fields, invalid email, wrong password),
    404 (unknown email), 500 (token creation failure).
    """
    logger.info("POST /auth/login - Initiate")
    tokens = get_auth_service(get_core()).login(data.email, data.password)
    logger.info("POST /auth/login - Success")
    return success(tokens.model_dump())


@auth_bp.post("/auth/verify")
@auth_required
def verify():
    """Confirm the bearer token. Reaching the body means it is valid."""
    return success({"valid": True})


@auth_bp.post("/auth/refresh")
def refresh():
    """
    Exchange a refresh token (sent as the bearer) for a new token pair.

    The refresh token goes through the same verification as any bearer
    token, including the user-existence re-check.
    """
    logger.info("POST /auth/refresh - Initiate")
    jwt_token = bearer_token_from_request()

    auth = get_auth_service(get_core())
    payload = auth.confirm_jwt(jwt_token)
    tokens = auth.refresh(payload.user)

    logger.info("POST /auth/refresh - Success")
    return success(tokens.model_dump())
