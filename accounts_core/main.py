"""Flask application entry point."""

import logging

from flask import Flask, g, jsonify, request
from flask_cors import CORS

from . import log_context
from .api.responses import error
from .config import settings
from .db import init_db
from .exceptions import (
    AccountsError,
    AuthenticationError,
    BadRequest,
    Conflict,
    ResourceNotFound,
)
from .utils import uid

CORRELATION_HEADER = "X-Correlation-ID"

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
)
log_context.install(logging.getLogger().handlers)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)

# CORS configuration
CORS(app, origins=settings.cors_origins, supports_credentials=True,
     expose_headers=[CORRELATION_HEADER])


# Database initialization (runs once on app startup)
def initialize_database():
    """Initialize database on app startup."""
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


with app.app_context():
    initialize_database()


# Correlation id
@app.before_request
def assign_correlation_id():
    """Take the caller's correlation id or generate one."""
    g.correlation_id = request.headers.get(CORRELATION_HEADER) or uid.generate_uuid()


@app.after_request
def echo_correlation_id(response):
    """Return the correlation id on every response."""
    if "correlation_id" in g:
        response.headers[CORRELATION_HEADER] = g.correlation_id
    return response


# Error handlers
def _render(error_obj: AccountsError, status: int):
    logger.warning(f"{error_obj.__class__.__name__}: {error_obj.message}")
    return error(error_obj.__class__.__name__, error_obj.message, status, error_obj.details)


@app.errorhandler(ResourceNotFound)
def handle_not_found(error_obj):
    """Handle ResourceNotFound exceptions (UserNotFound)."""
    return _render(error_obj, 404)


@app.errorhandler(BadRequest)
def handle_bad_request(error_obj):
    """Handle ValidationError, credential and malformed-token errors."""
    return _render(error_obj, 400)


@app.errorhandler(Conflict)
def handle_conflict(error_obj):
    """Handle Conflict exceptions (AlreadyExists)."""
    return _render(error_obj, 409)


@app.errorhandler(AuthenticationError)
def handle_authentication_error(error_obj):
    """Handle missing authorization and expired tokens."""
    return _render(error_obj, 401)


@app.errorhandler(AccountsError)
def handle_accounts_error(error_obj):
    """Handle every other AccountsError as a server-side failure."""
    logger.error(f"{error_obj.__class__.__name__}: {error_obj.message}")
    return error(error_obj.__class__.__name__, error_obj.message, 500, error_obj.details)


@app.errorhandler(500)
def handle_internal_error(error_obj):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error_obj}")
    return error("InternalServerError", "An internal error occurred", 500)


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Register blueprints
from .auth.api import auth_bp  # noqa: E402
from .users.api import users_bp  # noqa: E402

app.register_blueprint(auth_bp)
app.register_blueprint(users_bp)


if __name__ == "__main__":
    app.run(debug=True)
