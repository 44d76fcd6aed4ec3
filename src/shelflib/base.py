"""Shelf protocol — a persistent, transactional mapping from K to V."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, MutableMapping
from typing import TYPE_CHECKING, Any, TypeVar

from shelflib.modes import AddReplaceMode

if TYPE_CHECKING:
    from types import TracebackType

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


class ShelfTransaction(ABC):
    """An open transaction on a shelf.

    Call :meth:`commit` to make the work durable, then :meth:`close`.
    Closing without committing rolls everything back.  Used as a context
    manager, the handle is closed on exit::

        with shelf.begin_transaction() as tx:
            shelf.set_value(AddReplaceMode.add(), key, value)
            tx.commit()
    """

    @abstractmethod
    def commit(self) -> None:
        """Commit all work done since the transaction began."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the transaction, rolling back if it was not committed."""
        ...

    def __enter__(self) -> ShelfTransaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BaseShelf(MutableMapping[K, V], ABC):
    """Abstract base for all shelf implementations.

    Subclasses implement the explicit operations; this class derives the
    Python mapping protocol from them.  ``shelf[key] = value`` adds or
    replaces, and ``shelf[key]`` / ``del shelf[key]`` raise
    :class:`KeyError` for missing keys.
    """

    @abstractmethod
    def contains_key(self, key: K) -> bool:
        """Return ``True`` if *key* has a stored value."""
        ...

    @abstractmethod
    def try_get_value(self, key: K) -> V | None:
        """Return the value stored for *key*, or ``None`` if there is none."""
        ...

    @abstractmethod
    def set_value(self, mode: AddReplaceMode, key: K, value: V) -> bool:
        """Add or replace the value for *key* as *mode* allows.

        Returns ``False`` without changing anything when *mode* forbids
        the operation the key's presence calls for.
        """
        ...

    @abstractmethod
    def delete_value(self, key: K) -> bool:
        """Delete *key*.  Returns ``False`` if it was not present."""
        ...

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of stored keys."""
        ...

    @abstractmethod
    def get_keys(self, skip: int = 0, take: int | None = None) -> list[K]:
        """Return up to *take* keys after skipping *skip*, in storage order."""
        ...

    @abstractmethod
    def begin_transaction(self) -> ShelfTransaction:
        """Open a transaction.  Only one may be open at a time."""
        ...

    @abstractmethod
    def close(self) -> None: ...

    def with_transaction(self, func: Callable[[], R]) -> R:
        """Run *func* inside a new transaction and commit if it returns."""
        with self.begin_transaction() as tx:
            result = func()
            tx.commit()
        return result

    # ── context manager ──────────────────────────────────────

    def __enter__(self) -> BaseShelf[K, V]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ── mapping protocol ─────────────────────────────────────

    def __getitem__(self, key: K) -> V:
        value = self.try_get_value(key)
        # a stored None looks like a missing key
        if value is None and not self.contains_key(key):
            raise KeyError(key)
        return value  # type: ignore[return-value]

    def __setitem__(self, key: K, value: V) -> None:
        self.set_value(AddReplaceMode.add_or_replace(), key, value)

    def __delitem__(self, key: K) -> None:
        if not self.delete_value(key):
            raise KeyError(key)

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[K]:
        return iter(self.get_keys())
