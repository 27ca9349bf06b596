# src/todo_sync/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import SyncReport, UserIdentity
from .ports import RemoteDocuments, TaskRepo


@dataclass
class AppState:
    """
    Wiring for one running app: settings, the local store and the remote handle.

    Everything is injected (see cli/bootstrap.py); nothing here reads globals.
    """

    settings: Any
    task_store: TaskRepo
    remote: RemoteDocuments
    collection_id: str = "tasks"
    # Pre-resolved sync user (API-key auth); None means ask the remote via /account.
    user: UserIdentity | None = None

    last_sync: SyncReport | None = None
    # Serializes console commands and sync passes (no overlapping synchronize()).
    lock: threading.Lock = field(default_factory=threading.Lock)
