"""Parameterized statements over the shelf's row table.

Statements run against whatever transaction is open on the connection,
so the same :class:`ShelfQueries` serves both explicit and implicit
transactions without rebinding.
"""

from __future__ import annotations

import sqlite3
from contextlib import closing

from shelflib.exceptions import InconsistencyError

_CREATE_TABLE = """
CREATE TABLE "shelf_rows" (
    "id"      INTEGER PRIMARY KEY AUTOINCREMENT,
    "keyhash" BLOB NOT NULL,
    "key"     BLOB NOT NULL,
    "value"   BLOB NOT NULL
)
"""

_CREATE_INDEX = """
CREATE INDEX "shelf_rows_keyhash" ON "shelf_rows" ("keyhash")
"""

_SELECT_KEYS_BY_HASH = 'SELECT "id", "key" FROM "shelf_rows" WHERE "keyhash" = ? ORDER BY "id"'
_SELECT_VALUE_BY_ID = 'SELECT "value" FROM "shelf_rows" WHERE "id" = ?'
_SELECT_COUNT = 'SELECT COUNT("id") FROM "shelf_rows"'
_SELECT_KEY_LIST = 'SELECT "key" FROM "shelf_rows" ORDER BY "keyhash", "id" LIMIT ? OFFSET ?'
_INSERT = 'INSERT INTO "shelf_rows" ("keyhash", "key", "value") VALUES (?, ?, ?)'
_UPDATE = 'UPDATE "shelf_rows" SET "value" = ? WHERE "id" = ?'
_DELETE = 'DELETE FROM "shelf_rows" WHERE "id" = ?'


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the row table and its keyhash index.  Caller owns the transaction."""
    for statement in (_CREATE_TABLE, _CREATE_INDEX):
        with closing(conn.execute(statement)):
            pass


class ShelfQueries:
    """One method per statement kind.  Holds no state beyond the connection.

    Parameters:
        conn: Open connection to the shelf file.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _changes(self, sql: str, params: tuple[object, ...]) -> bool:
        with closing(self._conn.execute(sql, params)) as cursor:
            return cursor.rowcount == 1

    # ── reads ────────────────────────────────────────────────

    def select_keys_by_hash(self, keyhash: bytes) -> list[tuple[int, bytes]]:
        """Return ``(id, key bytes)`` for every row stored under *keyhash*."""
        with closing(self._conn.execute(_SELECT_KEYS_BY_HASH, (keyhash,))) as cursor:
            return [(row[0], bytes(row[1])) for row in cursor.fetchall()]

    def select_value_by_id(self, row_id: int) -> bytes:
        """Return the value bytes of row *row_id*.

        Raises:
            InconsistencyError: If no such row exists.
        """
        with closing(self._conn.execute(_SELECT_VALUE_BY_ID, (row_id,))) as cursor:
            row = cursor.fetchone()
        if row is None:
            raise InconsistencyError(row_id)
        return bytes(row[0])

    def select_count(self) -> int:
        with closing(self._conn.execute(_SELECT_COUNT)) as cursor:
            (count,) = cursor.fetchone()
        return int(count)

    def select_key_list(self, limit: int, offset: int) -> list[bytes]:
        """Return key bytes ordered by ``(keyhash, id)``.  A *limit* of ``-1`` means no limit."""
        with closing(self._conn.execute(_SELECT_KEY_LIST, (limit, offset))) as cursor:
            return [bytes(row[0]) for row in cursor.fetchall()]

    # ── writes ───────────────────────────────────────────────

    def insert(self, keyhash: bytes, key: bytes, value: bytes) -> bool:
        return self._changes(_INSERT, (keyhash, key, value))

    def update(self, row_id: int, value: bytes) -> bool:
        return self._changes(_UPDATE, (value, row_id))

    def delete(self, row_id: int) -> bool:
        return self._changes(_DELETE, (row_id,))
