"""Transaction coordination — one open transaction per connection at most."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from typing import TypeVar

from shelflib.base import ShelfTransaction
from shelflib.exceptions import TransactionError

logger = logging.getLogger(__name__)

R = TypeVar("R")

BEGIN_STATEMENTS = {
    "deferred": "BEGIN DEFERRED",
    "immediate": "BEGIN IMMEDIATE",
    "exclusive": "BEGIN EXCLUSIVE",
}


def begin_statement(begin: str) -> str:
    """Return the SQL for a ``begin`` mode name.

    Raises:
        ValueError: If *begin* is not a known mode.
    """
    if begin not in BEGIN_STATEMENTS:
        available = ", ".join(sorted(BEGIN_STATEMENTS))
        raise ValueError(f"Unknown begin mode: '{begin}'. Available modes: {available}")
    return BEGIN_STATEMENTS[begin]


class CoordinatedTransaction(ShelfTransaction):
    """Handle returned by :meth:`TransactionCoordinator.begin`.

    Moves from ``"active"`` to ``"committed"`` on commit and to
    ``"closed"`` on close.  Closing a committed handle only releases it.
    """

    def __init__(self, coordinator: TransactionCoordinator) -> None:
        self._coordinator = coordinator
        self._state = "active"

    @property
    def state(self) -> str:
        return self._state

    def commit(self) -> None:
        if self._state != "active":
            raise TransactionError("No transaction to commit")
        self._coordinator._commit(self)
        self._state = "committed"

    def close(self) -> None:
        if self._state == "closed":
            raise TransactionError("No transaction to close")
        if self._state == "active":
            self._coordinator._rollback(self)
        self._state = "closed"

    def _detach(self) -> None:
        self._state = "closed"


class TransactionCoordinator:
    """Tracks the connection's open transaction and wraps work that has none.

    Parameters:
        conn:  Connection in autocommit mode (``isolation_level=None``), so
               that transactions begin only when this class says so.
        begin: Which ``BEGIN`` flavour to issue (see ``BEGIN_STATEMENTS``).
    """

    def __init__(self, conn: sqlite3.Connection, begin: str = "immediate") -> None:
        self._begin_sql = begin_statement(begin)
        self._conn = conn
        self._current: CoordinatedTransaction | None = None

    @property
    def active(self) -> bool:
        return self._current is not None

    def begin(self) -> CoordinatedTransaction:
        """Begin a transaction and return its handle.

        Raises:
            TransactionError: If a transaction is already open.
        """
        if self._current is not None:
            raise TransactionError(
                "Transaction already in progress (nested transactions are not supported)"
            )
        self._conn.execute(self._begin_sql).close()
        logger.debug("Transaction begun (%s)", self._begin_sql)
        self._current = CoordinatedTransaction(self)
        return self._current

    def run(self, func: Callable[[], R]) -> R:
        """Call *func* inside the open transaction, or inside a fresh one.

        A fresh transaction is committed if *func* returns and rolled
        back if it raises.
        """
        if self._current is not None:
            return func()
        with self.begin() as tx:
            result = func()
            tx.commit()
        return result

    def close(self) -> None:
        """Roll back and detach any transaction still open."""
        tx = self._current
        if tx is None:
            return
        logger.debug("Rolling back transaction left open at close")
        try:
            self._rollback(tx)
        finally:
            tx._detach()

    # ── handle callbacks ─────────────────────────────────────

    def _check_current(self, tx: CoordinatedTransaction) -> None:
        if tx is not self._current:
            raise TransactionError("Transaction is no longer active on this shelf")

    def _commit(self, tx: CoordinatedTransaction) -> None:
        self._check_current(tx)
        self._conn.execute("COMMIT").close()
        self._current = None
        logger.debug("Transaction committed")

    def _rollback(self, tx: CoordinatedTransaction) -> None:
        self._check_current(tx)
        try:
            # SQLite may already have rolled back after certain errors
            if self._conn.in_transaction:
                self._conn.execute("ROLLBACK").close()
        finally:
            self._current = None
        logger.debug("Transaction rolled back")
