"""Traits for tuples and lists built from the traits of their items.

Every item is written as a 4-byte big-endian length followed by the
item's own encoding, so nested encodings never need escaping.  Lists
additionally lead with a 4-byte item count.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator, Sequence
from typing import Any

from shelflib.traits.base import TypeTraits

_LENGTH = struct.Struct(">I")


def _pack(parts: Sequence[bytes]) -> bytes:
    chunks: list[bytes] = []
    for part in parts:
        chunks.append(_LENGTH.pack(len(part)))
        chunks.append(part)
    return b"".join(chunks)


def _unpack(data: bytes, offset: int = 0) -> Iterator[bytes]:
    while offset < len(data):
        if offset + _LENGTH.size > len(data):
            raise ValueError("Truncated length prefix")
        (size,) = _LENGTH.unpack_from(data, offset)
        offset += _LENGTH.size
        if offset + size > len(data):
            raise ValueError("Truncated item encoding")
        yield data[offset : offset + size]
        offset += size


class TupleTraits(TypeTraits[tuple[Any, ...]]):
    """Fixed-arity tuples, ordered lexicographically by component.

    Parameters:
        *items: One :class:`TypeTraits` per tuple position.

    Example:
        traits = TupleTraits(StringTraits(), IntTraits())
        traits.serialize(("red", 7))
    """

    def __init__(self, *items: TypeTraits[Any]) -> None:
        if not items:
            raise ValueError("TupleTraits requires at least one item traits")
        self.items = items

    def serialize(self, value: tuple[Any, ...]) -> bytes:
        if len(value) != len(self.items):
            raise ValueError(f"Expected a tuple of {len(self.items)} items, got {len(value)}")
        return _pack([traits.serialize(item) for traits, item in zip(self.items, value)])

    def deserialize(self, data: bytes) -> tuple[Any, ...]:
        parts = list(_unpack(data))
        if len(parts) != len(self.items):
            raise ValueError(f"Expected {len(self.items)} encoded items, found {len(parts)}")
        return tuple(traits.deserialize(part) for traits, part in zip(self.items, parts))

    def compare(self, a: tuple[Any, ...], b: tuple[Any, ...]) -> int:
        for traits, x, y in zip(self.items, a, b):
            result = traits.compare(x, y)
            if result != 0:
                return result
        return 0

    def to_debug_string(self, value: tuple[Any, ...]) -> str:
        inner = ", ".join(t.to_debug_string(v) for t, v in zip(self.items, value))
        return f"({inner})"


class ListTraits(TypeTraits[list[Any]]):
    """Variable-length lists, ordered lexicographically with shorter prefixes first."""

    def __init__(self, item: TypeTraits[Any]) -> None:
        self.item = item

    def serialize(self, value: list[Any]) -> bytes:
        body = _pack([self.item.serialize(v) for v in value])
        return _LENGTH.pack(len(value)) + body

    def deserialize(self, data: bytes) -> list[Any]:
        if len(data) < _LENGTH.size:
            raise ValueError("Truncated list count")
        (count,) = _LENGTH.unpack_from(data, 0)
        parts = list(_unpack(data, _LENGTH.size))
        if len(parts) != count:
            raise ValueError(f"Expected {count} encoded items, found {len(parts)}")
        return [self.item.deserialize(part) for part in parts]

    def compare(self, a: list[Any], b: list[Any]) -> int:
        for x, y in zip(a, b):
            result = self.item.compare(x, y)
            if result != 0:
                return result
        return (len(a) > len(b)) - (len(a) < len(b))

    def to_debug_string(self, value: list[Any]) -> str:
        return "[" + ", ".join(self.item.to_debug_string(v) for v in value) + "]"
