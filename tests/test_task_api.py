# tests/test_task_api.py

from __future__ import annotations

import json

import httpx

from todo_sync.core.state import AppState
from todo_sync.remote.appwrite_client import AppwriteClient
from todo_sync.remote.offline import OfflineDocumentService
from todo_sync.tasks.task_api import (
    add_task_and_sync,
    complete_task,
    delete_task,
    edit_task,
    list_tasks_with_sync,
    run_sync,
)
from todo_sync.tasks.task_models import UserIdentity

from .fakes import FakeRemote


def test_add_task_and_sync_links_new_task(state: AppState, remote: FakeRemote) -> None:
    task_id, report = add_task_and_sync(state, name="Buy milk", description="2%")

    assert report is not None
    assert report.linked == 1
    task = state.task_store.get_task(task_id)
    assert task is not None
    assert task.remote_id in remote.documents
    assert state.last_sync is report


def test_add_task_offline_keeps_task_local(state: AppState) -> None:
    state.remote = OfflineDocumentService()

    task_id, report = add_task_and_sync(state, name="Buy milk", description="2%")

    assert report is None
    task = state.task_store.get_task(task_id)
    assert task is not None
    assert task.remote_id is None


def test_run_sync_without_user_returns_none(state: AppState, remote: FakeRemote) -> None:
    state.task_store.add_task(name="a", description="a")
    remote.user = None

    assert run_sync(state) is None
    assert remote.create_calls == []
    assert state.last_sync is None


def test_list_tasks_with_sync_pushes_before_listing(state: AppState) -> None:
    state.task_store.add_task(name="a", description="a")
    state.task_store.add_task(name="b", description="b")

    tasks = list_tasks_with_sync(state)

    assert [t.name for t in tasks] == ["a", "b"]
    assert all(t.remote_id for t in tasks)


def test_complete_linked_task_updates_remote(state: AppState, remote: FakeRemote) -> None:
    task_id, _ = add_task_and_sync(state, name="a", description="a")
    task = state.task_store.get_task(task_id)
    assert task is not None and task.remote_id

    assert complete_task(state, task_id)

    assert remote.updates == [("tasks", task.remote_id, {"completed": True})]
    assert remote.documents[task.remote_id].data["completed"] is True
    done = state.task_store.get_task(task_id)
    assert done is not None and done.completed


def test_complete_unlinked_task_is_local_only(state: AppState, remote: FakeRemote) -> None:
    task_id = state.task_store.add_task(name="a", description="a")

    assert complete_task(state, task_id)

    assert remote.updates == []
    done = state.task_store.get_task(task_id)
    assert done is not None and done.completed


def test_complete_keeps_local_state_when_remote_fails(state: AppState, remote: FakeRemote) -> None:
    task_id, _ = add_task_and_sync(state, name="a", description="a")
    remote.fail_updates = True

    assert complete_task(state, task_id)

    done = state.task_store.get_task(task_id)
    assert done is not None and done.completed


def test_complete_missing_task(state: AppState) -> None:
    assert complete_task(state, 123) is False


def test_edit_and_delete_are_local_only(state: AppState, remote: FakeRemote) -> None:
    task_id, _ = add_task_and_sync(state, name="a", description="a")
    task = state.task_store.get_task(task_id)
    assert task is not None

    assert edit_task(state, task_id, name="b", description="c")
    assert remote.documents[task.remote_id].data["name"] == "a"

    assert delete_task(state, task_id)
    assert state.task_store.get_task(task_id) is None
    assert task.remote_id in remote.documents
    assert remote.updates == []


def test_run_sync_with_api_key_uses_configured_user(state: AppState) -> None:
    posted: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/account"):
            return httpx.Response(401, json={"message": "missing scope (account)"})
        body = json.loads(request.content)
        posted.append(body["data"])
        return httpx.Response(201, json={"$id": body["documentId"]})

    state.remote = AppwriteClient(
        "https://appwrite.test/v1",
        "proj-1",
        "db-1",
        api_key="server-key",
        transport=httpx.MockTransport(handler),
    )
    state.user = UserIdentity(user_id="uid-configured")
    task_id = state.task_store.add_task(name="Buy milk", description="2%")

    try:
        report = run_sync(state)
    finally:
        state.remote.close()

    assert report is not None
    assert report.linked == 1
    assert posted[0]["user_id"] == "uid-configured"
    task = state.task_store.get_task(task_id)
    assert task is not None
    assert task.remote_id is not None
