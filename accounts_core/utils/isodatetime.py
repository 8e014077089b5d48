"""ISO 8601 datetime/date conversion utilities.

This module centralizes all transformations between Python datetime/date objects
and the strings stored in the user table, plus the unix timestamps used in
JWT claims.
"""

from datetime import date, datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.isoformat().replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_unix() -> int:
    """Get current UTC time as integer seconds since the epoch."""
    return int(datetime.now(UTC).timestamp())


def to_datestring(d: date) -> str:
    """Convert date to ISO 8601 date string (YYYY-MM-DD)."""
    return d.isoformat()


def to_date(datestring: str) -> date:
    """Convert ISO 8601 date string (YYYY-MM-DD) to date."""
    return date.fromisoformat(datestring)
