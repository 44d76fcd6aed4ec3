"""Key resolution — maps a typed key to the id of the row that holds it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from shelflib._internal.queries import ShelfQueries
    from shelflib.traits.base import TypeTraits

K = TypeVar("K")


class KeyResolver(Generic[K]):
    """Finds a key's row through its digest, then confirms by exact comparison.

    Rows are indexed only by the digest of the serialized key, and
    distinct keys may share a digest.  Every candidate under the digest
    is deserialized and compared with ``key_traits.compare``; only a
    result of zero counts as a match.
    """

    def __init__(self, key_traits: TypeTraits[K], queries: ShelfQueries) -> None:
        self._key_traits = key_traits
        self._queries = queries

    def resolve(self, key: K) -> int | None:
        """Return the row id holding *key*, or ``None`` if no row does."""
        keyhash = self._key_traits.digest(key)
        for row_id, key_bytes in self._queries.select_keys_by_hash(keyhash):
            candidate = self._key_traits.deserialize(key_bytes)
            if self._key_traits.compare(key, candidate) == 0:
                return row_id
        return None
