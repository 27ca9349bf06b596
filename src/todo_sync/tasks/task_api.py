# src/todo_sync/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.errors import AuthenticationError, RemoteError, StorageError
from ..core.state import AppState
from .task_models import SyncReport, TaskRecord
from .task_sync import synchronize

logger = logging.getLogger(__name__)


def run_sync(state: AppState) -> SyncReport | None:
    """
    Background-style sync pass: never raises.

    Returns None when the pass was aborted (no user / local store unreadable);
    per-task failures are in the returned report.
    """
    try:
        report = synchronize(
            state.task_store,
            state.remote,
            collection_id=state.collection_id,
            user=state.user,
        )
    except AuthenticationError as e:
        logger.info("Sync skipped: %s", e)
        return None
    except StorageError:
        logger.exception("Sync aborted: could not read unlinked tasks")
        return None

    state.last_sync = report
    return report


def add_task_and_sync(state: AppState, *, name: str, description: str) -> tuple[int, SyncReport | None]:
    """
    Insert a new task and push it right away.

    The local insert is the source of truth: a failed sync leaves the task unlinked.
    ValueError (empty name/description) and StorageError propagate.
    """
    task_id = state.task_store.add_task(name=name, description=description)
    logger.info("Task %s added, syncing", task_id)
    return task_id, run_sync(state)


def list_tasks_with_sync(state: AppState) -> list[TaskRecord]:
    """Sync first, then read the list (what the task screen does when it becomes visible)."""
    run_sync(state)
    return state.task_store.list_tasks()


def edit_task(state: AppState, task_id: int, *, name: str, description: str) -> bool:
    """Local edit only. Linked documents keep the fields they had when pushed."""
    return state.task_store.update_task(task_id, name=name, description=description)


def complete_task(state: AppState, task_id: int) -> bool:
    """
    Mark a task completed locally and, if it is linked, on its remote document too.

    The local write wins: a remote failure is logged and the task stays completed locally.
    Returns False if the task does not exist.
    """
    task = state.task_store.get_task(task_id)
    if task is None:
        return False

    if not state.task_store.mark_completed(task_id):
        return False

    if task.remote_id:
        try:
            state.remote.update_document(state.collection_id, task.remote_id, {"completed": True})
            logger.info("Task %s completed (remote %s updated)", task_id, task.remote_id)
        except RemoteError:
            logger.exception("Task %s completed locally; remote update failed remote_id=%s", task_id, task.remote_id)
    else:
        logger.info("Task %s completed (not linked yet)", task_id)
    return True


def delete_task(state: AppState, task_id: int) -> bool:
    """Local delete only; a linked remote document is left in place."""
    deleted = state.task_store.delete_task(task_id)
    if deleted:
        logger.info("Task %s deleted", task_id)
    return deleted
