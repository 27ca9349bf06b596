# src/todo_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The sync routine depends on Protocols instead of concrete implementations.
This keeps the SQLite store and the Appwrite client swappable and makes testing easier.
"""

from typing import Any, Protocol

from ..tasks.task_models import TaskRecord, UserIdentity

DocumentData = dict[str, Any]
# Field map sent to the remote store: {"name": ..., "completed": ..., ...}.


class IdentityService(Protocol):
    """Resolves the currently authenticated remote user. Raises AuthenticationError."""

    def current_user(self) -> UserIdentity: ...


class DocumentService(Protocol):
    """
    Remote document store.

    create_document is NOT idempotent: two calls with equal data create two documents.
    Failures (including timeouts) raise RemoteError.
    """

    def create_document(self, collection_id: str, data: DocumentData) -> str: ...

    def update_document(self, collection_id: str, document_id: str, data: DocumentData) -> None: ...


class RemoteDocuments(IdentityService, DocumentService, Protocol):
    """Identity + documents, as exposed by one authenticated remote client."""


class TaskRepo(Protocol):
    # Sync API (point-in-time reads/writes, raise StorageError)
    def query_unlinked(self) -> list[TaskRecord]: ...
    def set_remote_id(self, task_id: int, remote_id: str) -> bool: ...

    # Console / task API
    def add_task(self, *, name: str, description: str) -> int: ...
    def get_task(self, task_id: int) -> TaskRecord | None: ...
    def list_tasks(self) -> list[TaskRecord]: ...
    def update_task(self, task_id: int, *, name: str, description: str) -> bool: ...
    def mark_completed(self, task_id: int) -> bool: ...
    def delete_task(self, task_id: int) -> bool: ...
    def count_tasks(self) -> int: ...
