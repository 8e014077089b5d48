"""Request body validation decorator.

@validate_request inspects the view function's signature. Parameters that
Flask supplies from the URL (path parameters) are passed through unchanged;
the remaining parameter must be annotated with a Pydantic model and is
filled from the JSON request body.

    @users_bp.post("/user/confirm")
    @validate_request
    def confirm_user(data: ConfirmUserRequest):
        ...
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

SECRET_FIELDS = {"password", "old_password"}
REDACTED = "***"


def _format_errors(error: PydanticValidationError) -> list[dict]:
    """Flatten pydantic errors into {field, message, expected_type} dicts."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in error.errors(include_url=False)
    ]


def _redact(received: dict) -> dict:
    """Copy of a request body with secret field values masked."""
    return {
        key: REDACTED if key in SECRET_FIELDS else value
        for key, value in received.items()
    }


def validate_request(f):
    """
    Parse and validate the JSON body into the view's Pydantic parameter.

    Raises:
        TypeError: At decoration time if the view has no parameters or its
            first parameter is unannotated; at request time if the body
            parameter is not a BaseModel subclass
        ValidationError: If the body is not a JSON object or fails the model
    """
    params = list(inspect.signature(f).parameters.values())
    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")
    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(f"First parameter of {f.__name__} lacks a type annotation")

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}

        for param in params:
            if param.name in kwargs or param.name in view_args:
                continue

            model = param.annotation
            if not (isinstance(model, type) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            received = request.get_json(silent=True)
            if received is None:
                received = {}
            if not isinstance(received, dict):
                raise ValidationError(
                    "Request body must be a JSON object",
                    {"model": model.__name__, "received": received}
                )

            try:
                kwargs[param.name] = model.model_validate(received)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(received),
                        "errors": _format_errors(e),
                    }
                )

        return f(*args, **kwargs)

    return wrapper
