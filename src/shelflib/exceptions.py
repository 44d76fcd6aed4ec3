"""Custom exceptions for the shelflib package."""

from __future__ import annotations


class ShelfError(Exception):
    """Base exception for all shelf-related errors."""


class CreateOpenError(ShelfError):
    """Raised when the create/open mode forbids what the file system requires."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f'File "{path}" {message}')


class TransactionError(ShelfError):
    """Raised when a transaction is begun, committed or closed out of turn."""


class InconsistencyError(ShelfError):
    """Raised when a row found by key disappears before its value is read."""

    def __init__(self, row_id: int) -> None:
        self.row_id = row_id
        super().__init__(f"No value found for id {row_id}")


class ShelfClosedError(ShelfError):
    """Raised when an operation is attempted on a closed shelf."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot '{operation}' on a closed shelf")
