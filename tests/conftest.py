# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_sync.core.state import AppState
from todo_sync.tasks.task_store import TaskStore

from .fakes import FakeRemote


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-sync-test",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        appwrite_collection_id="tasks",
        remote_configured=False,
        remote_timeout_seconds=1.0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, remote: FakeRemote) -> AppState:
    """
    AppState wired with a fake remote.

    NOTE: We keep the real SQLite TaskStore here because its correctness
    is part of what we want to test.
    """
    return AppState(
        settings=settings,
        task_store=store,
        remote=remote,
        collection_id="tasks",
    )
