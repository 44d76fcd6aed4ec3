"""shelflib — persistent key-value shelves on SQLite.

Any key and value type can be stored once it has :class:`TypeTraits`.
Keys are indexed by a digest of their serialized form and matched by
exact comparison.  Every operation is transactional, either inside an
explicit transaction or in one of its own.
"""

import logging

from shelflib.base import BaseShelf, ShelfTransaction
from shelflib.config import ShelfConfig
from shelflib.exceptions import (
    CreateOpenError,
    InconsistencyError,
    ShelfClosedError,
    ShelfError,
    TransactionError,
)
from shelflib.modes import AddReplaceMode, CreateOpenMode
from shelflib.shelf import Shelf
from shelflib.traits import (
    BytesTraits,
    IntTraits,
    JsonTraits,
    ListTraits,
    ModelTraits,
    StringTraits,
    TupleTraits,
    TypeTraits,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AddReplaceMode",
    "BaseShelf",
    "BytesTraits",
    "CreateOpenError",
    "CreateOpenMode",
    "InconsistencyError",
    "IntTraits",
    "JsonTraits",
    "ListTraits",
    "ModelTraits",
    "Shelf",
    "ShelfClosedError",
    "ShelfConfig",
    "ShelfError",
    "ShelfTransaction",
    "StringTraits",
    "TransactionError",
    "TupleTraits",
    "TypeTraits",
]
