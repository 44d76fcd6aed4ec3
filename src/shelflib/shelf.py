"""Shelf — durable, single-file key-value storage on SQLite."""

from __future__ import annotations

import logging
import os
import sqlite3
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from shelflib._internal.queries import ShelfQueries, create_schema
from shelflib._internal.resolver import KeyResolver
from shelflib._internal.transaction import TransactionCoordinator, begin_statement
from shelflib.base import BaseShelf, ShelfTransaction
from shelflib.exceptions import CreateOpenError, ShelfClosedError
from shelflib.modes import AddReplaceMode, CreateOpenMode

if TYPE_CHECKING:
    from shelflib.config import ShelfConfig
    from shelflib.traits.base import TypeTraits

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


def _connect(path: str, uri_mode: str, timeout: float) -> sqlite3.Connection:
    # mode=rw refuses to create a file that vanished after the existence check
    uri = f"{Path(path).absolute().as_uri()}?mode={uri_mode}"
    return sqlite3.connect(uri, uri=True, timeout=timeout, isolation_level=None)


class Shelf(BaseShelf[K, V]):
    """Persistent mapping backed by a single SQLite file.

    Keys are located by the digest of their serialized form and confirmed
    by exact comparison, so any type with :class:`TypeTraits` can be a
    key.  Every operation that reads or writes by key runs in a
    transaction: the one opened by :meth:`begin_transaction` if there is
    one, otherwise a transaction of its own.

    Use :meth:`create` or :meth:`from_config` rather than the constructor.
    A shelf is not safe for concurrent use from several threads.

    Example:
        traits = TupleTraits(StringTraits(), IntTraits())
        with Shelf.create("colors.db", traits, traits, CreateOpenMode.create()) as shelf:
            shelf.set_value(AddReplaceMode.add(), ("red", 7), ("blue", 3))
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        key_traits: TypeTraits[K],
        value_traits: TypeTraits[V],
        *,
        path: str = "",
        begin: str = "immediate",
    ) -> None:
        self._conn = conn
        self._path = path
        self._key_traits = key_traits
        self._value_traits = value_traits
        self._transactions = TransactionCoordinator(conn, begin)
        self._queries = ShelfQueries(conn)
        self._resolver = KeyResolver(key_traits, self._queries)
        self._closed = False

    # ── construction ─────────────────────────────────────────

    @classmethod
    def create(
        cls,
        path: str | os.PathLike[str],
        key_traits: TypeTraits[K],
        value_traits: TypeTraits[V],
        mode: CreateOpenMode | None = None,
        *,
        timeout: float = 5.0,
        begin: str = "immediate",
    ) -> Shelf[K, V]:
        """Open the shelf at *path*, or create it, as *mode* allows.

        Parameters:
            path:         Shelf file location.
            key_traits:   Traits for keys.
            value_traits: Traits for values.
            mode:         Defaults to :meth:`CreateOpenMode.create_or_open`.
            timeout:      Seconds to wait on a locked database.
            begin:        ``"deferred"``, ``"immediate"`` or ``"exclusive"``.

        Raises:
            CreateOpenError: If the file exists and *mode* forbids opening,
                or is missing and *mode* forbids creating.
        """
        mode = mode or CreateOpenMode.create_or_open()
        pathname = os.fspath(path)
        begin_statement(begin)

        if os.path.exists(pathname):
            if not mode.allows_open:
                raise CreateOpenError(pathname, "already exists")
            creating = False
            conn = _connect(pathname, "rw", timeout)
        else:
            if not mode.allows_create:
                raise CreateOpenError(pathname, "does not exist")
            creating = True
            conn = _connect(pathname, "rwc", timeout)

        try:
            shelf = cls(conn, key_traits, value_traits, path=pathname, begin=begin)
            if creating:
                shelf._transactions.run(partial(create_schema, conn))
        except Exception:
            conn.close()
            if creating:
                # a file without the row table would later open as a broken shelf
                Path(pathname).unlink(missing_ok=True)
            raise

        if creating:
            logger.info("Created shelf %s", pathname)
        else:
            logger.debug("Opened shelf %s", pathname)
        return shelf

    @classmethod
    def from_config(
        cls,
        config: ShelfConfig,
        key_traits: TypeTraits[K],
        value_traits: TypeTraits[V],
    ) -> Shelf[K, V]:
        return cls.create(
            config.path,
            key_traits,
            value_traits,
            config.create_open_mode,
            timeout=config.timeout,
            begin=config.begin,
        )

    # ── properties ───────────────────────────────────────────

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_transaction(self) -> bool:
        """``True`` while a transaction from :meth:`begin_transaction` is open."""
        return self._transactions.active

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise ShelfClosedError(operation)

    # ── Shelf protocol ───────────────────────────────────────

    def contains_key(self, key: K) -> bool:
        self._ensure_open("contains_key")
        return self._transactions.run(partial(self._contains_key, key))

    def try_get_value(self, key: K) -> V | None:
        """Return the value stored for *key*, or ``None``.

        Raises:
            InconsistencyError: If the key's row disappears between being
                found and being read.
        """
        self._ensure_open("try_get_value")
        return self._transactions.run(partial(self._try_get_value, key))

    def set_value(self, mode: AddReplaceMode, key: K, value: V) -> bool:
        self._ensure_open("set_value")
        return self._transactions.run(partial(self._set_value, mode, key, value))

    def delete_value(self, key: K) -> bool:
        self._ensure_open("delete_value")
        return self._transactions.run(partial(self._delete_value, key))

    @property
    def count(self) -> int:
        self._ensure_open("count")
        return self._queries.select_count()

    def get_keys(self, skip: int = 0, take: int | None = None) -> list[K]:
        """Return keys ordered by ``(digest, id)``.

        Raises:
            ValueError: If *skip* or *take* is negative.
        """
        if skip < 0:
            raise ValueError("skip must not be negative")
        if take is not None and take < 0:
            raise ValueError("take must not be negative")
        self._ensure_open("get_keys")

        limit = -1 if take is None else take
        return [
            self._key_traits.deserialize(key_bytes)
            for key_bytes in self._queries.select_key_list(limit, skip)
        ]

    def begin_transaction(self) -> ShelfTransaction:
        """Open an explicit transaction.

        Raises:
            TransactionError: If one is already open.
        """
        self._ensure_open("begin_transaction")
        return self._transactions.begin()

    def close(self) -> None:
        """Roll back any open transaction and close the connection.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            self._transactions.close()
        finally:
            self._conn.close()
            logger.debug("Closed shelf %s", self._path)

    # ── operation bodies (run inside a transaction) ──────────

    def _contains_key(self, key: K) -> bool:
        return self._resolver.resolve(key) is not None

    def _try_get_value(self, key: K) -> V | None:
        row_id = self._resolver.resolve(key)
        if row_id is None:
            return None
        value_bytes = self._queries.select_value_by_id(row_id)
        return self._value_traits.deserialize(value_bytes)

    def _set_value(self, mode: AddReplaceMode, key: K, value: V) -> bool:
        row_id = self._resolver.resolve(key)

        if row_id is not None:
            if not mode.allows_replace:
                return False
            return self._queries.update(row_id, self._value_traits.serialize(value))

        if not mode.allows_add:
            return False
        return self._queries.insert(
            self._key_traits.digest(key),
            self._key_traits.serialize(key),
            self._value_traits.serialize(value),
        )

    def _delete_value(self, key: K) -> bool:
        row_id = self._resolver.resolve(key)
        if row_id is None:
            return False
        return self._queries.delete(row_id)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Shelf(path={self._path!r}, {state})"
