from __future__ import annotations


class TodoError(Exception):
    """Base class for errors raised by the todo application."""


class StorageError(TodoError):
    """Opening, migrating, reading or writing the database failed."""


class ValidationError(TodoError):
    """A form field could not be parsed."""

    def __init__(self, message: str = "invalid id") -> None:
        super().__init__(message)
