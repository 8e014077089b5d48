"""User table operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

Lookups return None when no row matches; the services decide which error
that becomes. Only the *_with_password lookups select the password column.
"""

import sqlite3
from datetime import date
from typing import TYPE_CHECKING

from ..utils import isodatetime, uid

if TYPE_CHECKING:
    from . import Core

USER_COLUMNS = "id, email, first_name, last_name, dob, created_at"
USER_COLUMNS_WITH_PASSWORD = "id, email, password, first_name, last_name, dob, created_at"


class UserOperations:
    """Parameterized reads and writes against the user table."""

    def __init__(self, conn: sqlite3.Connection, owner: "Core | None" = None):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
            owner: Core that owns conn; referenced so conn stays open while
                these operations are reachable
        """
        self._conn = conn
        self._owner = owner

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        """Get user by ID, without the password hash."""
        return self._conn.execute(
            f'SELECT {USER_COLUMNS} FROM "user" WHERE id = ?',
            (user_id,)
        ).fetchone()

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get user by (lower-cased) email, without the password hash."""
        return self._conn.execute(
            f'SELECT {USER_COLUMNS} FROM "user" WHERE email = ?',
            (email,)
        ).fetchone()

    def get_with_password(self, user_id: str) -> sqlite3.Row | None:
        """Get user by ID including the password hash."""
        return self._conn.execute(
            f'SELECT {USER_COLUMNS_WITH_PASSWORD} FROM "user" WHERE id = ?',
            (user_id,)
        ).fetchone()

    def get_by_email_with_password(self, email: str) -> sqlite3.Row | None:
        """Get user by (lower-cased) email including the password hash."""
        return self._conn.execute(
            f'SELECT {USER_COLUMNS_WITH_PASSWORD} FROM "user" WHERE email = ?',
            (email,)
        ).fetchone()

    def exists(self, user_id: str) -> bool:
        """Return True if a user with this ID exists."""
        row = self._conn.execute(
            'SELECT 1 FROM "user" WHERE id = ?',
            (user_id,)
        ).fetchone()
        return row is not None

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        dob: date | None,
    ) -> sqlite3.Row:
        """Insert a user with an auto-generated UUID and creation timestamp.

        Args:
            email: Lower-cased email address
            password_hash: Argon2id hash of the password
            first_name: Given name
            last_name: Family name
            dob: Date of birth

        Returns:
            The inserted row, without the password hash

        Raises:
            sqlite3.IntegrityError: On duplicate email or a missing required column
        """
        user_id = uid.generate_uuid()
        dob_str = isodatetime.to_datestring(dob) if dob is not None else None

        self._conn.execute(
            """INSERT INTO "user" (id, email, password, first_name, last_name, dob, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (user_id, email, password_hash, first_name, last_name, dob_str, isodatetime.now())
        )

        return self.get_by_id(user_id)

    def update_password(self, user_id: str, password_hash: str) -> sqlite3.Row | None:
        """Replace the stored password hash.

        Returns:
            The updated row (without password), or None if no row was updated
        """
        cursor = self._conn.execute(
            'UPDATE "user" SET password = ? WHERE id = ?',
            (password_hash, user_id)
        )
        if cursor.rowcount == 0:
            return None
        return self.get_by_id(user_id)

    def delete(self, user_id: str) -> int:
        """Delete a user.

        Returns:
            Number of rows deleted (0 or 1)
        """
        cursor = self._conn.execute(
            'DELETE FROM "user" WHERE id = ?',
            (user_id,)
        )
        return cursor.rowcount

    def count(self) -> int:
        """Count registered users."""
        return self._conn.execute('SELECT COUNT(*) FROM "user"').fetchone()[0]
