"""Type traits: serialization, ordering and hashing for shelf keys and values."""

from shelflib.traits.base import TypeTraits
from shelflib.traits.composite import ListTraits, TupleTraits
from shelflib.traits.primitives import BytesTraits, IntTraits, StringTraits
from shelflib.traits.structured import JsonTraits, ModelTraits

__all__ = [
    "BytesTraits",
    "IntTraits",
    "JsonTraits",
    "ListTraits",
    "ModelTraits",
    "StringTraits",
    "TupleTraits",
    "TypeTraits",
]
