from __future__ import annotations


class HistoryError(Exception):
    """Base class for errors raised by the history core."""


class ContentValidationError(HistoryError, ValueError):
    """Raised when submitted content is empty or too long."""


class EntryNotFound(HistoryError, KeyError):
    """Raised when a requested entry id is outside the log or was never assigned."""

    def __init__(self, entry_id: int):
        super().__init__(entry_id)
        self.entry_id = entry_id

    def __str__(self) -> str:
        return f"Entry not found: {self.entry_id}"


class StorageError(HistoryError, RuntimeError):
    """Raised when the database cannot be reached or a statement fails."""


class InconsistentStoreError(StorageError):
    """
    An id passed the bounds check but its row could not be read.

    This is a data-consistency fault, not a user input problem.
    """
