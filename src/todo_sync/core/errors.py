# src/todo_sync/core/errors.py

from __future__ import annotations


class TodoSyncError(Exception):
    """Base class for all todo-sync errors."""


class AuthenticationError(TodoSyncError):
    """No resolvable user identity. Fatal for a whole sync pass."""


class StorageError(TodoSyncError):
    """Local SQLite read/write failure."""


class RemoteError(TodoSyncError):
    """Remote document call failed (HTTP error, transport error or timeout)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
