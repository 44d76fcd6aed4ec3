"""Traits for JSON documents and pydantic models.

Both encode to canonical JSON text and order values by their encoded
bytes, which is a total order consistent with equality of the encodings.
"""

from __future__ import annotations

import json
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from shelflib.traits.base import TypeTraits, compare_natural

M = TypeVar("M", bound=BaseModel)


class JsonTraits(TypeTraits[Any]):
    """JSON-compatible values (dicts, lists, strings, numbers, bools, ``None``)."""

    def serialize(self, value: Any) -> bytes:
        return json.dumps(
            value, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValueError(f"Invalid JSON encoding: {exc}") from exc

    def compare(self, a: Any, b: Any) -> int:
        return compare_natural(self.serialize(a), self.serialize(b))

    def to_debug_string(self, value: Any) -> str:
        return self.serialize(value).decode("utf-8")


class ModelTraits(TypeTraits[M], Generic[M]):
    """Instances of one pydantic model class.

    Parameters:
        model: The :class:`pydantic.BaseModel` subclass to store.
    """

    def __init__(self, model: type[M]) -> None:
        self.model = model

    def serialize(self, value: M) -> bytes:
        return value.model_dump_json().encode("utf-8")

    def deserialize(self, data: bytes) -> M:
        try:
            return self.model.model_validate_json(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid {self.model.__name__} encoding: {exc}") from exc

    def compare(self, a: M, b: M) -> int:
        return compare_natural(self.serialize(a), self.serialize(b))

    def to_debug_string(self, value: M) -> str:
        return f"{self.model.__name__}({self.serialize(value).decode('utf-8')})"
