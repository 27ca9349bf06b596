# src/todo_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time: an unconfigured remote means offline mode.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TODO_SYNC"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_optional(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- Appwrite ----
    appwrite_endpoint: Optional[str]
    appwrite_project_id: Optional[str]
    appwrite_database_id: Optional[str]
    appwrite_collection_id: str
    appwrite_jwt: Optional[str]
    appwrite_api_key: Optional[str]
    # Owner of pushed documents when authenticating with an API key (no /account).
    appwrite_user_id: Optional[str]

    # ---- Sync ----
    remote_timeout_seconds: float
    sync_on_start: bool

    @property
    def remote_configured(self) -> bool:
        return bool(self.appwrite_endpoint and self.appwrite_project_id and self.appwrite_database_id)

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(override=False)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-sync"))

        return Settings(
            app_name=_env(_k("APP_NAME"), "todo-sync") or "todo-sync",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=data_dir,
            tasks_db_path=_env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3"),
            appwrite_endpoint=_env_optional(_k("APPWRITE_ENDPOINT")),
            appwrite_project_id=_env_optional(_k("APPWRITE_PROJECT_ID")),
            appwrite_database_id=_env_optional(_k("APPWRITE_DATABASE_ID")),
            appwrite_collection_id=_env_optional(_k("APPWRITE_COLLECTION_ID")) or "tasks",
            appwrite_jwt=_env_optional(_k("APPWRITE_JWT")),
            appwrite_api_key=_env_optional(_k("APPWRITE_API_KEY")),
            appwrite_user_id=_env_optional(_k("APPWRITE_USER_ID")),
            # Per-task limit for one remote call; a timeout fails only that task.
            remote_timeout_seconds=max(1.0, _env_float(_k("REMOTE_TIMEOUT_SECONDS"), 10.0)),
            sync_on_start=_env_bool(_k("SYNC_ON_START"), True),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
