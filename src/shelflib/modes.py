"""Create/open and add/replace modes — named capability pairs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateOpenMode:
    """Whether :meth:`Shelf.create` may create a new file, open an existing one, or both.

    Attributes:
        allows_create: A missing file may be created and initialized.
        allows_open:   An existing file may be opened.
    """

    allows_create: bool
    allows_open: bool

    def __post_init__(self) -> None:
        if not (self.allows_create or self.allows_open):
            raise ValueError("CreateOpenMode must allow create, open, or both")

    # ── Factory helpers ──────────────────────────────────────

    @staticmethod
    def create() -> CreateOpenMode:
        return CreateOpenMode(allows_create=True, allows_open=False)

    @staticmethod
    def open() -> CreateOpenMode:
        return CreateOpenMode(allows_create=False, allows_open=True)

    @staticmethod
    def create_or_open() -> CreateOpenMode:
        return CreateOpenMode(allows_create=True, allows_open=True)

    @staticmethod
    def parse(name: str) -> CreateOpenMode:
        """Build a mode from ``"create"``, ``"open"`` or ``"create_or_open"``."""
        factories = {
            "create": CreateOpenMode.create,
            "open": CreateOpenMode.open,
            "create_or_open": CreateOpenMode.create_or_open,
        }
        if name not in factories:
            available = ", ".join(sorted(factories))
            raise ValueError(f"Unknown create/open mode: '{name}'. Available modes: {available}")
        return factories[name]()


@dataclass(frozen=True)
class AddReplaceMode:
    """Whether :meth:`Shelf.set_value` may add a missing key, replace an existing one, or both.

    Attributes:
        allows_add:     A key with no row may be inserted.
        allows_replace: The value of an existing key may be overwritten.
    """

    allows_add: bool
    allows_replace: bool

    def __post_init__(self) -> None:
        if not (self.allows_add or self.allows_replace):
            raise ValueError("AddReplaceMode must allow add, replace, or both")

    # ── Factory helpers ──────────────────────────────────────

    @staticmethod
    def add() -> AddReplaceMode:
        return AddReplaceMode(allows_add=True, allows_replace=False)

    @staticmethod
    def replace() -> AddReplaceMode:
        return AddReplaceMode(allows_add=False, allows_replace=True)

    @staticmethod
    def add_or_replace() -> AddReplaceMode:
        return AddReplaceMode(allows_add=True, allows_replace=True)

    @staticmethod
    def parse(name: str) -> AddReplaceMode:
        """Build a mode from ``"add"``, ``"replace"`` or ``"add_or_replace"``."""
        factories = {
            "add": AddReplaceMode.add,
            "replace": AddReplaceMode.replace,
            "add_or_replace": AddReplaceMode.add_or_replace,
        }
        if name not in factories:
            available = ", ".join(sorted(factories))
            raise ValueError(f"Unknown add/replace mode: '{name}'. Available modes: {available}")
        return factories[name]()
