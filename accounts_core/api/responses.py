"""JSON response envelopes.

Success: {"data": ..., "correlation_id": "..."}
Error:   {"error": {"type", "message", "details"?}, "correlation_id": "..."}
"""

from typing import Any

from flask import jsonify

from ..log_context import current_correlation_id


def success(data: Any, status: int = 200):
    """Wrap data in the success envelope."""
    return jsonify({
        "data": data,
        "correlation_id": current_correlation_id()
    }), status


def error(error_type: str, message: str, status: int, details: dict | None = None):
    """Build the error envelope. Details are omitted when empty."""
    body = {
        "error": {
            "type": error_type,
            "message": message
        },
        "correlation_id": current_correlation_id()
    }
    if details:
        body["error"]["details"] = details
    return jsonify(body), status
