# src/todo_sync/remote/offline.py

from __future__ import annotations

from ..core.errors import AuthenticationError, RemoteError
from ..core.ports import DocumentData
from ..tasks.task_models import UserIdentity


class OfflineDocumentService:
    """
    Stand-in remote used when Appwrite is not configured.

    Behavior:
    - current_user() -> AuthenticationError, so a sync pass aborts before pushing anything
    - document calls -> RemoteError
    Tasks simply stay unlinked until a real remote is configured.
    """

    reason = "remote store is not configured (set TODO_SYNC_APPWRITE_ENDPOINT / _PROJECT_ID / _DATABASE_ID)"

    def current_user(self) -> UserIdentity:
        raise AuthenticationError(self.reason)

    def create_document(self, collection_id: str, data: DocumentData) -> str:
        raise RemoteError(self.reason)

    def update_document(self, collection_id: str, document_id: str, data: DocumentData) -> None:
        raise RemoteError(self.reason)

    def close(self) -> None:
        return
