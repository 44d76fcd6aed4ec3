"""Traits for scalar types: ``str``, ``int`` and ``bytes``."""

from __future__ import annotations

from shelflib.traits.base import TypeTraits, compare_natural


class StringTraits(TypeTraits[str]):
    """UTF-8 strings, ordered by code point."""

    def serialize(self, value: str) -> bytes:
        return value.encode("utf-8")

    def deserialize(self, data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"Invalid UTF-8 string encoding: {exc}") from exc

    def compare(self, a: str, b: str) -> int:
        return compare_natural(a, b)


class IntTraits(TypeTraits[int]):
    """Arbitrary-precision integers as minimal big-endian two's complement, numerically ordered."""

    def serialize(self, value: int) -> bytes:
        length = (value + (value < 0)).bit_length() // 8 + 1
        return value.to_bytes(length, "big", signed=True)

    def deserialize(self, data: bytes) -> int:
        if not data:
            raise ValueError("Empty integer encoding")
        return int.from_bytes(data, "big", signed=True)

    def compare(self, a: int, b: int) -> int:
        return compare_natural(a, b)


class BytesTraits(TypeTraits[bytes]):
    """Raw bytes, stored as-is and ordered lexicographically."""

    def serialize(self, value: bytes) -> bytes:
        return bytes(value)

    def deserialize(self, data: bytes) -> bytes:
        return bytes(data)

    def compare(self, a: bytes, b: bytes) -> int:
        return compare_natural(a, b)

    def to_debug_string(self, value: bytes) -> str:
        return value.hex()
