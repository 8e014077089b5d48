"""User API endpoints for Accounts Core.

- POST   /user          - Register and return a token pair
- POST   /user/confirm  - Look up a user by email
- GET    /user          - Current user (auth required)
- DELETE /user          - Remove current user after password check (auth required)
- PUT    /password      - Change password (auth required)

Writes run inside get_core(atomic=True) so a failure after the insert
(e.g. token signing) rolls the row back.
"""

import logging

from flask import Blueprint, g

from .. import messages
from ..api.responses import success
from ..api.validation import validate_request
from ..auth.decorators import auth_required
from ..auth.schemas import (
    ChangePasswordRequest,
    ConfirmUserRequest,
    RegisterRequest,
    RemoveUserRequest,
)
from ..db import get_core
from ..exceptions import MissingFields
from .service import get_user_service

logger = logging.getLogger(__name__)


users_bp = Blueprint("users", __name__)


@users_bp.post("/user")
@validate_request
def register(data: RegisterRequest):
    """
    Register a new user.

    Example request:
    ```json
    {
        "email": "ada@example.com",
        "password": "Secret#123",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "dob": "1815-12-10"
    }
    ```

    Returns:
        201 with {bearer_token, refresh_token}; 400 on validation or policy
        failures; 409 if the email is taken.
    """
    logger.info("POST /user - Initiate")
    with get_core(atomic=True) as core:
        tokens = get_user_service(core).register(data)
    logger.info("POST /user - Success")
    return success(tokens.model_dump(), 201)


@users_bp.post("/user/confirm")
@validate_request
def confirm_user(data: ConfirmUserRequest):
    """Return the user registered under an email address."""
    user = get_user_service(get_core()).confirm_by_email(data.email)
    return success(user.model_dump(mode="json"))


@users_bp.get("/user")
@auth_required
def get_user():
    """Return the authenticated user."""
    user = get_user_service(get_core()).fetch(g.user_id)
    return success(user.model_dump(mode="json"))


@users_bp.delete("/user")
@auth_required
@validate_request
def remove_user(data: RemoveUserRequest):
    """Remove the authenticated user. Requires the current password."""
    logger.info(f"DELETE /user - Initiate for user {g.user_id}")
    with get_core(atomic=True) as core:
        get_user_service(core).remove(g.user_id, data.password)
    logger.info(f"DELETE /user - Success for user {g.user_id}")
    return success("Successfully removed user.")


@users_bp.put("/password")
@auth_required
@validate_request
def change_password(data: ChangePasswordRequest):
    """Change the authenticated user's password."""
    logger.info(f"PUT /password - Initiate for user {g.user_id}")

    if not data.old_password:
        raise MissingFields(messages.MISSING_OLD_PASSWORD, {"field": "old_password"})
    if not data.password:
        raise MissingFields(messages.MISSING_NEW_PASSWORD, {"field": "password"})

    with get_core(atomic=True) as core:
        get_user_service(core).change_password(g.user_id, data.old_password, data.password)

    logger.info(f"PUT /password - Success for user {g.user_id}")
    return success("Successfully updated password")
