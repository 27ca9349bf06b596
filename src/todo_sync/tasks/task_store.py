# src/todo_sync/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from ..core.errors import StorageError
from .task_models import TaskRecord

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - databases written by the mobile app carry `appwrite_id`; it is copied into `remote_id`

    Thread-safety:
    - each method opens its own SQLite connection (no long-held transactions),
      so console edits and a sync pass can interleave safely
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connect(self, op: str) -> Iterator[sqlite3.Connection]:
        """Short-lived connection; any sqlite3.Error surfaces as StorageError."""
        conn: sqlite3.Connection | None = None
        try:
            conn = self._get_conn()
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"{op} failed: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def _ensure_schema(self) -> None:
        with self._connect("ensure_schema") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL,
                    completed BOOLEAN DEFAULT 0,
                    remote_id TEXT UNIQUE
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            if "completed" not in cols:
                cur.execute("ALTER TABLE tasks ADD COLUMN completed BOOLEAN DEFAULT 0")
                logger.info("TaskStore migration: added column completed")

            if "remote_id" not in cols:
                # ALTER TABLE cannot add a UNIQUE column; the index below enforces it.
                cur.execute("ALTER TABLE tasks ADD COLUMN remote_id TEXT")
                logger.info("TaskStore migration: added column remote_id")

            if "appwrite_id" in cols:
                cur.execute(
                    """
                    UPDATE tasks
                    SET remote_id = appwrite_id
                    WHERE remote_id IS NULL
                      AND appwrite_id IS NOT NULL
                    """
                )
                if cur.rowcount:
                    logger.info("TaskStore migration: copied %s appwrite_id values", cur.rowcount)

            cur.execute("CREATE UNIQUE INDEX IF NOT EXISTS idx_tasks_remote_id ON tasks(remote_id)")
            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> TaskRecord:
        return TaskRecord(
            id=int(row["id"]),
            name=str(row["name"] or ""),
            description=str(row["description"] or ""),
            completed=bool(row["completed"]),
            remote_id=row["remote_id"],
        )

    @staticmethod
    def _clean_text(value: str, field_name: str) -> str:
        if not value or not value.strip():
            raise ValueError(f"{field_name} is required")
        return value.strip()

    # ---- sync API ----

    def query_unlinked(self) -> list[TaskRecord]:
        """Tasks that were never pushed (remote_id IS NULL), in insertion order."""
        with self._connect("query_unlinked") as conn:
            cur = conn.execute("SELECT * FROM tasks WHERE remote_id IS NULL ORDER BY id ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]

    def set_remote_id(self, task_id: int, remote_id: str) -> bool:
        """
        Link a task to its remote document.

        Only unlinked rows are written, so an existing link is never overwritten.
        Returns False if the row is gone or was linked in the meantime.
        """
        if not remote_id:
            raise ValueError("remote_id is required")

        with self._connect("set_remote_id") as conn:
            cur = conn.execute(
                "UPDATE tasks SET remote_id = ? WHERE id = ? AND remote_id IS NULL",
                (remote_id, int(task_id)),
            )
            conn.commit()
            return cur.rowcount == 1

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect("count_tasks") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def add_task(self, *, name: str, description: str) -> int:
        name = self._clean_text(name, "name")
        description = self._clean_text(description, "description")

        with self._connect("add_task") as conn:
            cur = conn.execute(
                "INSERT INTO tasks (name, description, completed) VALUES (?, ?, 0)",
                (name, description),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s name=%r", task_id, name)
            return task_id

    def get_task(self, task_id: int) -> TaskRecord | None:
        with self._connect("get_task") as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
            return self._row_to_task(row) if row else None

    def list_tasks(self) -> list[TaskRecord]:
        with self._connect("list_tasks") as conn:
            cur = conn.execute("SELECT * FROM tasks ORDER BY id ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]

    def update_task(self, task_id: int, *, name: str, description: str) -> bool:
        """Edit name/description. Does not touch remote_id or completed."""
        name = self._clean_text(name, "name")
        description = self._clean_text(description, "description")

        with self._connect("update_task") as conn:
            cur = conn.execute(
                "UPDATE tasks SET name = ?, description = ? WHERE id = ?",
                (name, description, int(task_id)),
            )
            conn.commit()
            return cur.rowcount == 1

    def mark_completed(self, task_id: int) -> bool:
        with self._connect("mark_completed") as conn:
            cur = conn.execute("UPDATE tasks SET completed = 1 WHERE id = ?", (int(task_id),))
            conn.commit()
            return cur.rowcount == 1

    def delete_task(self, task_id: int) -> bool:
        with self._connect("delete_task") as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            return cur.rowcount == 1
