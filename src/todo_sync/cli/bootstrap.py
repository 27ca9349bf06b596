# src/todo_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite store and the remote client into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import RemoteDocuments
from ..core.state import AppState
from ..remote.appwrite_client import AppwriteClient
from ..remote.offline import OfflineDocumentService
from ..tasks.task_models import UserIdentity
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_remote(settings) -> RemoteDocuments:
    """Appwrite client if configured, otherwise the offline stand-in."""
    if not getattr(settings, "remote_configured", False):
        logger.info("Appwrite is not configured; running offline (tasks stay local).")
        return OfflineDocumentService()

    return AppwriteClient(
        endpoint=settings.appwrite_endpoint,
        project_id=settings.appwrite_project_id,
        database_id=settings.appwrite_database_id,
        jwt=settings.appwrite_jwt,
        api_key=settings.appwrite_api_key,
        timeout_seconds=settings.remote_timeout_seconds,
    )


def configured_user(settings) -> UserIdentity | None:
    """
    Sync user taken from settings instead of GET /account.

    Only used with API-key auth: a server key has no account, so the documents
    owner must be configured (TODO_SYNC_APPWRITE_USER_ID). With a JWT the
    signed-in user is always asked for.
    """
    if not getattr(settings, "remote_configured", False):
        return None
    if getattr(settings, "appwrite_jwt", None) or not getattr(settings, "appwrite_api_key", None):
        return None

    user_id = (getattr(settings, "appwrite_user_id", None) or "").strip()
    if not user_id:
        logger.warning("API-key auth without TODO_SYNC_APPWRITE_USER_ID; sync will be skipped.")
        return None
    return UserIdentity(user_id=user_id)


def create_initial_state(*, settings=None, remote: RemoteDocuments | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and the remote injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(
        settings=settings,
        task_store=TaskStore(settings.tasks_db_path),
        remote=remote if remote is not None else create_remote(settings),
        collection_id=settings.appwrite_collection_id,
        user=configured_user(settings),
    )
