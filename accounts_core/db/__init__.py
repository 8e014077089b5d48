"""Database module for Accounts Core.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to user operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or on garbage collection
- Services receive a Core explicitly, so tests can build one around an
  in-memory connection

Usage:

    # Autocommit-style read
    core = get_core()
    row = core.user.get_by_id(user_id)

    # Atomic write
    with get_core(atomic=True) as core:
        core.user.create(email, password_hash, ...)
        # Commits on exit, rolls back on exception
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from .. import messages
from ..config import settings
from ..exceptions import AlreadyExists, MissingFields, UnexpectedError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .user import UserOperations


class Core:
    """
    Database Core with user operations.

    Maintains its own connection and transaction state.

    Connection Lifecycle:
    - atomic=True: Connection closes on __exit__ from context manager
    - atomic=False: Caller commits explicitly if it writes
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None

    @property
    def user(self) -> "UserOperations":
        """User table operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn, owner=self)
        return self._user_ops

    def commit(self) -> None:
        """Commit pending writes on a non-atomic Core."""
        self._conn.commit()

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        """Close the connection if it is still open at garbage collection."""
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                # Connection may already be closed or invalid
                pass


def _create_connection() -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for writes that need to commit together.

    Returns:
        Core instance with user operations
    """
    conn = _create_connection()
    return Core(conn, atomic=atomic)


@contextmanager
def storage_errors(operation: str):
    """
    Translate sqlite3 errors raised inside the block into Accounts errors.

    - UNIQUE constraint failures become AlreadyExists
    - NOT NULL constraint failures become MissingFields
    - anything else from the driver becomes UnexpectedError

    The driver message is kept as the error message for constraint
    failures so clients can see which column was at fault.

    Args:
        operation: Name of the calling operation, used in log lines
    """
    try:
        yield
    except sqlite3.IntegrityError as e:
        reason = str(e)
        logger.warning(f"{operation}: integrity error: {reason}")
        if reason.startswith("UNIQUE constraint failed"):
            raise AlreadyExists(reason, {"reason": reason}) from e
        if reason.startswith("NOT NULL constraint failed"):
            raise MissingFields(reason, {"reason": reason}) from e
        raise UnexpectedError(messages.UNEXPECTED_ERROR) from e
    except sqlite3.Error as e:
        logger.error(f"{operation}: database error: {e}")
        raise UnexpectedError(messages.UNEXPECTED_ERROR) from e


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with sqlite3.connect(str(db_path)) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        db.executescript(SCHEMA_PATH.read_text())
        db.commit()


def get_schema_version(conn: sqlite3.Connection) -> str:
    """Get current schema version from _schema_metadata table."""
    row = conn.execute(
        "SELECT value FROM _schema_metadata WHERE key = 'version'"
    ).fetchone()
    return row[0] if row else "unknown"
