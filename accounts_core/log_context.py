"""Correlation-id propagation into log records.

main.py stores a correlation id on flask.g for every request; the filter
below copies it onto each LogRecord so the root format can print it.
"""

import logging

from flask import g, has_app_context

NO_CORRELATION_ID = "-"


def current_correlation_id() -> str:
    """Return the active request's correlation id, or "-" outside a request."""
    if has_app_context():
        return g.get("correlation_id", NO_CORRELATION_ID)
    return NO_CORRELATION_ID


class CorrelationIdFilter(logging.Filter):
    """Attach record.correlation_id for format strings that reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = current_correlation_id()
        return True


def install(handlers: list[logging.Handler]) -> None:
    """Add the filter to each handler that does not already have one."""
    for handler in handlers:
        if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters):
            handler.addFilter(CorrelationIdFilter())
