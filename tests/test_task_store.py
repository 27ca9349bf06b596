# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from todo_sync.core.errors import StorageError
from todo_sync.tasks.task_store import TaskStore


def test_add_get_list_update_delete(store: TaskStore) -> None:
    t1 = store.add_task(name="  Buy milk ", description=" 2% ")
    t2 = store.add_task(name="Call Bob", description="re: invoice")
    assert t2 > t1

    task = store.get_task(t1)
    assert task is not None
    assert task.name == "Buy milk"
    assert task.description == "2%"
    assert task.completed is False
    assert task.remote_id is None

    assert [t.id for t in store.list_tasks()] == [t1, t2]
    assert store.count_tasks() == 2

    assert store.update_task(t1, name="Buy oat milk", description="1L")
    updated = store.get_task(t1)
    assert updated is not None
    assert (updated.name, updated.description) == ("Buy oat milk", "1L")

    assert store.mark_completed(t2)
    done = store.get_task(t2)
    assert done is not None and done.completed is True

    assert store.delete_task(t1)
    assert store.get_task(t1) is None
    assert store.delete_task(t1) is False
    assert store.update_task(999, name="x", description="y") is False
    assert store.mark_completed(999) is False


@pytest.mark.parametrize("name,description", [("", "d"), ("   ", "d"), ("n", ""), ("n", "  ")])
def test_add_task_rejects_empty_fields(store: TaskStore, name: str, description: str) -> None:
    with pytest.raises(ValueError):
        store.add_task(name=name, description=description)
    assert store.count_tasks() == 0


def test_query_unlinked_and_set_remote_id(store: TaskStore) -> None:
    t1 = store.add_task(name="a", description="a")
    t2 = store.add_task(name="b", description="b")
    t3 = store.add_task(name="c", description="c")

    assert [t.id for t in store.query_unlinked()] == [t1, t2, t3]

    assert store.set_remote_id(t2, "r2") is True
    assert [t.id for t in store.query_unlinked()] == [t1, t3]

    linked = store.get_task(t2)
    assert linked is not None
    assert linked.remote_id == "r2"
    assert linked.is_linked


def test_set_remote_id_never_overwrites_existing_link(store: TaskStore) -> None:
    t1 = store.add_task(name="a", description="a")
    assert store.set_remote_id(t1, "first")
    assert store.set_remote_id(t1, "second") is False

    task = store.get_task(t1)
    assert task is not None
    assert task.remote_id == "first"


def test_set_remote_id_on_missing_row_returns_false(store: TaskStore) -> None:
    assert store.set_remote_id(42, "r") is False


def test_duplicate_remote_id_raises_storage_error(store: TaskStore) -> None:
    t1 = store.add_task(name="a", description="a")
    t2 = store.add_task(name="b", description="b")
    store.set_remote_id(t1, "same")

    with pytest.raises(StorageError):
        store.set_remote_id(t2, "same")

    task = store.get_task(t2)
    assert task is not None
    assert task.remote_id is None


def test_schema_is_idempotent(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    first = TaskStore(db)
    task_id = first.add_task(name="a", description="a")

    second = TaskStore(db)
    assert second.get_task(task_id) is not None
    assert second.count_tasks() == 1


def test_migrates_appwrite_id_column(tmp_path: Path) -> None:
    db = tmp_path / "legacy.sqlite3"
    conn = sqlite3.connect(db)
    conn.execute(
        """
        CREATE TABLE tasks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            completed BOOLEAN DEFAULT 0,
            appwrite_id TEXT UNIQUE
        )
        """
    )
    conn.execute("INSERT INTO tasks (name, description, completed, appwrite_id) VALUES ('a', 'a', 0, 'abc123')")
    conn.execute("INSERT INTO tasks (name, description, completed) VALUES ('b', 'b', 1)")
    conn.commit()
    conn.close()

    store = TaskStore(db)
    tasks = store.list_tasks()
    assert [t.remote_id for t in tasks] == ["abc123", None]
    assert tasks[1].completed is True
    assert [t.name for t in store.query_unlinked()] == ["b"]


def test_unreadable_database_raises_storage_error(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = TaskStore(db)

    conn = sqlite3.connect(db)
    conn.execute("DROP TABLE tasks")
    conn.commit()
    conn.close()

    with pytest.raises(StorageError):
        store.query_unlinked()
