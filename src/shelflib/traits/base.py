"""TypeTraits protocol — how a shelf turns keys and values into bytes."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class TypeTraits(ABC, Generic[T]):
    """Abstract base for the serialization and ordering rules of one type.

    A shelf never inspects keys or values directly.  It stores whatever
    ``serialize`` produces, indexes keys by ``digest`` and decides key
    identity with ``compare``.  Implementations must guarantee:

    * ``deserialize(serialize(x))`` compares equal to ``x``.
    * ``serialize`` is deterministic, so equal values hash equally.
    * ``compare`` is a total order consistent with key equality.
    """

    @abstractmethod
    def serialize(self, value: T) -> bytes:
        """Return the canonical byte encoding of *value*."""
        ...

    @abstractmethod
    def deserialize(self, data: bytes) -> T:
        """Rebuild a value from bytes produced by ``serialize``.

        Raises:
            ValueError: If *data* is not a valid encoding.
        """
        ...

    @abstractmethod
    def compare(self, a: T, b: T) -> int:
        """Return a negative number, zero, or a positive number as *a* < *b*, *a* == *b*, *a* > *b*."""
        ...

    def digest(self, value: T) -> bytes:
        """Return the SHA-256 digest of the canonical encoding of *value*."""
        return hashlib.sha256(self.serialize(value)).digest()

    def to_debug_string(self, value: T) -> str:
        return repr(value)


def compare_natural(a: object, b: object) -> int:
    """Three-way comparison for values that support ``<``."""
    if a < b:  # type: ignore[operator]
        return -1
    if b < a:  # type: ignore[operator]
        return 1
    return 0
