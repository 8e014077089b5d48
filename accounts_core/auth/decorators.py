"""Authentication decorators for protected endpoints.

- @auth_required - Requires a valid bearer JWT whose subject still exists

The decorator stores the authenticated user's ID in flask.g.user_id.
"""

import logging
from functools import wraps

from flask import g, request

from .. import messages
from ..db import get_core
from ..exceptions import AuthenticationError
from .service import get_auth_service

logger = logging.getLogger(__name__)


def bearer_token_from_request() -> str:
    """
    Extract the token from an "Authorization: Bearer <token>" header.

    Raises:
        AuthenticationError: If the header is missing or not a bearer header
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        logger.warning("Unauthenticated request to protected endpoint")
        raise AuthenticationError(
            messages.UNAUTHORIZED,
            {"expected": "Authorization: Bearer <token>"}
        )

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise AuthenticationError(
            "Invalid authorization header format",
            {"expected": "Authorization: Bearer <token>"}
        )

    return parts[1]


def auth_required(f):
    """
    Decorator to require a valid bearer token for endpoint access.

    The token is verified and its subject re-checked against the user
    table, so tokens of removed users are rejected.

    Raises:
        AuthenticationError: If the header is missing/ill-formed (401)
        TokenExpired: If the token has expired (401)
        MalformedToken: If the token is invalid (400)
        UserNotFound: If the token's user no longer exists (404)
        ConfigurationError: If no signing key is configured (500)

    Example:
    ```python
    @users_bp.get("/user")
    @auth_required
    def get_user():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        jwt_token = bearer_token_from_request()
        payload = get_auth_service(get_core()).confirm_jwt(jwt_token)
        g.user_id = payload.user
        logger.debug(f"JWT authentication successful for user {g.user_id}")
        return f(*args, **kwargs)

    return wrapper
