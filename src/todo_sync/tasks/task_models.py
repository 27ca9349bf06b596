# src/todo_sync/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


@dataclass(slots=True)
class TaskRecord:
    id: int
    name: str
    description: str
    completed: bool = False
    remote_id: str | None = None

    @property
    def is_linked(self) -> bool:
        return self.remote_id is not None


@dataclass(slots=True, frozen=True)
class UserIdentity:
    user_id: str
    name: str | None = None
    email: str | None = None

    @classmethod
    def from_account(cls, data: dict[str, Any]) -> UserIdentity:
        """Build from an Appwrite account payload ({"$id": ..., "name": ..., "email": ...})."""
        user_id = str(data.get("$id") or "").strip()
        if not user_id:
            raise ValueError("account payload has no $id")
        return cls(
            user_id=user_id,
            name=data.get("name") or None,
            email=data.get("email") or None,
        )


class SyncStatus(StrEnum):
    LINKED = "linked"
    REMOTE_FAILED = "remote_failed"
    # Remote document exists but the local row was not updated.
    STORAGE_FAILED = "storage_failed"


@dataclass(slots=True, frozen=True)
class SyncOutcome:
    task_id: int
    status: SyncStatus
    remote_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == SyncStatus.LINKED


@dataclass(slots=True)
class SyncReport:
    """
    Result of one synchronize() pass.

    Notes:
    - outcomes are in batch order, one per attempted task
    - a STORAGE_FAILED outcome still carries the remote_id that was created,
      so callers can see which remote documents are orphaned
    """

    user_id: str
    outcomes: list[SyncOutcome] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def linked(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return self.attempted - self.linked

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def failures(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if not o.ok]
