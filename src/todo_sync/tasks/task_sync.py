# src/todo_sync/tasks/task_sync.py

from __future__ import annotations

"""
One-way task sync (local -> remote).

A single pass that:
- resolves the authenticated user (or takes a pre-resolved one),
- selects every task without a remote_id,
- creates one remote document per task, strictly one task at a time,
- writes the returned document id back into the local row.

Per-task failures are recorded in the SyncReport and never stop the batch.
Only an authentication failure aborts the pass, before anything is pushed.

Known gap: if the remote create succeeds but the local update fails, the task
stays unlinked and the next pass creates a second remote document for it.
The orphaned id is kept in the outcome and logged.
"""

import logging

from ..core.errors import AuthenticationError, RemoteError, StorageError
from ..core.ports import DocumentData, DocumentService, IdentityService, TaskRepo
from .task_models import SyncOutcome, SyncReport, SyncStatus, TaskRecord, UserIdentity

logger = logging.getLogger(__name__)


def build_document(task: TaskRecord, user: UserIdentity) -> DocumentData:
    """Remote document fields for a task, as of now."""
    return {
        "name": task.name,
        "description": task.description,
        "completed": bool(task.completed),
        "user_id": user.user_id,
    }


def resolve_user(identity: IdentityService) -> UserIdentity:
    try:
        user = identity.current_user()
    except AuthenticationError:
        raise
    except Exception as e:
        raise AuthenticationError(f"could not resolve current user: {e}") from e

    if user is None or not getattr(user, "user_id", None):
        raise AuthenticationError("remote returned no user identity")
    return user


def _push_one(
    task: TaskRecord,
    task_store: TaskRepo,
    documents: DocumentService,
    *,
    collection_id: str,
    user: UserIdentity,
) -> SyncOutcome:
    try:
        remote_id = documents.create_document(collection_id, build_document(task, user))
    except RemoteError as e:
        logger.error("sync: create_document failed task_id=%s: %s", task.id, e)
        return SyncOutcome(task_id=task.id, status=SyncStatus.REMOTE_FAILED, error=str(e))
    except Exception as e:
        logger.exception("sync: create_document crashed task_id=%s", task.id)
        return SyncOutcome(task_id=task.id, status=SyncStatus.REMOTE_FAILED, error=repr(e))

    try:
        linked = task_store.set_remote_id(task.id, remote_id)
    except StorageError as e:
        linked = False
        reason = str(e)
    except Exception as e:
        logger.exception("sync: set_remote_id crashed task_id=%s", task.id)
        linked = False
        reason = repr(e)
    else:
        reason = "task row deleted or already linked"

    if not linked:
        logger.warning(
            "sync: remote document %s created but task_id=%s not linked (%s); "
            "the next pass will push it again",
            remote_id,
            task.id,
            reason,
        )
        return SyncOutcome(
            task_id=task.id,
            status=SyncStatus.STORAGE_FAILED,
            remote_id=remote_id,
            error=reason,
        )

    logger.debug("sync: task_id=%s -> remote_id=%s", task.id, remote_id)
    return SyncOutcome(task_id=task.id, status=SyncStatus.LINKED, remote_id=remote_id)


def synchronize(
    task_store: TaskRepo,
    remote: DocumentService,
    *,
    collection_id: str,
    user: UserIdentity | None = None,
    identity: IdentityService | None = None,
) -> SyncReport:
    """
    Push every unlinked task to `collection_id` once.

    Identity:
    - `user` given -> used as-is, no identity call
    - otherwise resolved via `identity` (defaults to `remote`)

    Raises:
    - AuthenticationError if no user can be resolved (nothing is pushed)
    - StorageError if the batch itself cannot be read (nothing is pushed)

    Overlapping calls may push the same task twice; callers trigger sync
    from user-visible events only.
    """
    if not collection_id:
        raise ValueError("collection_id is required")

    if user is None:
        user = resolve_user(identity if identity is not None else remote)  # type: ignore[arg-type]

    batch = task_store.query_unlinked()
    report = SyncReport(user_id=user.user_id)

    if not batch:
        logger.debug("sync: nothing to push user=%s", user.user_id)
        return report

    logger.info("sync: pushing %s task(s) user=%s collection=%s", len(batch), user.user_id, collection_id)

    for task in batch:
        report.outcomes.append(
            _push_one(task, task_store, remote, collection_id=collection_id, user=user)
        )

    if report.ok:
        logger.info("sync: done linked=%s", report.linked)
    else:
        logger.warning(
            "sync: done linked=%s failed=%s (failed tasks stay unlinked)",
            report.linked,
            report.failed,
        )
    return report
