# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from todo_sync.core.errors import AuthenticationError, RemoteError
from todo_sync.tasks.task_models import UserIdentity


@dataclass(slots=True)
class CreatedDocument:
    collection_id: str
    document_id: str
    data: dict[str, Any]


class FakeRemote:
    """
    Deterministic in-memory remote document store for unit tests.

    - Captures every call for assertions
    - Hands out ids from `next_ids` (then "doc-<n>")
    - `fail_names`: tasks whose create_document raises RemoteError
    - `user=None` makes current_user() raise AuthenticationError
    """

    def __init__(
        self,
        *,
        user: UserIdentity | None = UserIdentity(user_id="user-1"),
        next_ids: list[str] | None = None,
        fail_names: set[str] | None = None,
    ) -> None:
        self.user = user
        self.next_ids = list(next_ids or [])
        self.fail_names = set(fail_names or ())
        self.identity_calls = 0
        self.create_calls: list[tuple[str, dict[str, Any]]] = []
        self.documents: dict[str, CreatedDocument] = {}
        self.updates: list[tuple[str, str, dict[str, Any]]] = []
        self.fail_updates = False

    def current_user(self) -> UserIdentity:
        self.identity_calls += 1
        if self.user is None:
            raise AuthenticationError("not signed in")
        return self.user

    def create_document(self, collection_id: str, data: dict[str, Any]) -> str:
        self.create_calls.append((collection_id, dict(data)))
        if data.get("name") in self.fail_names:
            raise RemoteError("simulated remote failure", status_code=503)
        document_id = self.next_ids.pop(0) if self.next_ids else f"doc-{len(self.documents) + 1}"
        self.documents[document_id] = CreatedDocument(collection_id, document_id, dict(data))
        return document_id

    def update_document(self, collection_id: str, document_id: str, data: dict[str, Any]) -> None:
        self.updates.append((collection_id, document_id, dict(data)))
        if self.fail_updates:
            raise RemoteError("simulated update failure", status_code=500)
        self.documents[document_id].data.update(data)
