# src/todo_sync/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.errors import StorageError
from ..core.state import AppState
from ..tasks.task_api import (
    add_task_and_sync,
    complete_task,
    delete_task,
    edit_task,
    list_tasks_with_sync,
    run_sync,
)
from ..tasks.task_models import SyncReport, TaskRecord

# (state, args, rest): rest is the raw text after the command name, spacing intact.
CommandHandler = Callable[[AppState, list[str], str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""
        args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args, rest)
        except ValueError as e:
            return f"Invalid input: {e}"
        except StorageError:
            logger.exception("Command /%s failed on local storage", name)
            return "Local storage error, see log for details."

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _split_name_description(raw: str) -> tuple[str, str]:
    """'Buy milk | 2%' -> ('Buy milk', '2%'). Inner spacing is kept as typed."""
    if "|" not in raw:
        raise ValueError("use: name | description")
    name, description = raw.split("|", 1)
    return name.strip(), description.strip()


def _parse_id(args: list[str]) -> int:
    if not args:
        raise ValueError("task id is required")
    try:
        return int(args[0])
    except ValueError:
        raise ValueError(f"not a task id: {args[0]!r}") from None


def format_task(task: TaskRecord) -> str:
    mark = "x" if task.completed else " "
    link = f"remote={task.remote_id}" if task.remote_id else "not synced"
    return f"[{mark}] #{task.id} {task.name} - {task.description} ({link})"


def format_sync(report: SyncReport | None) -> str:
    if report is None:
        return "Sync skipped (not signed in or remote not configured)."
    if report.attempted == 0:
        return "Sync: nothing to push."
    text = f"Sync: {report.linked}/{report.attempted} task(s) pushed."
    for o in report.failures():
        text += f"\n  #{o.task_id} {o.status.value}: {o.error}"
    return text


def cmd_help(state: AppState, args: list[str], rest: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str], rest: str) -> str:
    """/add name | description"""
    name, description = _split_name_description(rest)
    task_id, report = add_task_and_sync(state, name=name, description=description)
    return f"Task #{task_id} added.\n{format_sync(report)}"


def cmd_list(state: AppState, args: list[str], rest: str) -> str:
    tasks = list_tasks_with_sync(state)
    if not tasks:
        return "No to-dos found. Add a new task with /add name | description."
    return "\n".join(format_task(t) for t in tasks)


def cmd_edit(state: AppState, args: list[str], rest: str) -> str:
    """/edit id name | description"""
    task_id = _parse_id(args)
    remainder = rest.split(maxsplit=1)
    name, description = _split_name_description(remainder[1] if len(remainder) > 1 else "")
    task = state.task_store.get_task(task_id)
    if task is None:
        return f"Task #{task_id} not found."
    if task.completed:
        return f"Task #{task_id} is completed and can no longer be edited."
    edit_task(state, task_id, name=name, description=description)
    return f"Task #{task_id} updated."


def cmd_done(state: AppState, args: list[str], rest: str) -> str:
    task_id = _parse_id(args)
    if not complete_task(state, task_id):
        return f"Task #{task_id} not found."
    return f"Task #{task_id} completed."


def cmd_delete(state: AppState, args: list[str], rest: str) -> str:
    task_id = _parse_id(args)
    if not delete_task(state, task_id):
        return f"Task #{task_id} not found."
    return f"Task #{task_id} deleted."


def cmd_sync(state: AppState, args: list[str], rest: str) -> str:
    return format_sync(run_sync(state))


def cmd_status(state: AppState, args: list[str], rest: str) -> str:
    tasks = state.task_store.list_tasks()
    unlinked = sum(1 for t in tasks if not t.is_linked)
    remote = "configured" if getattr(state.settings, "remote_configured", False) else "offline"
    last = state.last_sync
    last_text = "never" if last is None else f"{last.linked}/{last.attempted} pushed"
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({unlinked} not synced)\n"
        f"  Remote: {remote} (collection: {state.collection_id})\n"
        f"  Last sync: {last_text}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task and sync: /add name | description.")
registry.register("list", cmd_list, help_text="Sync, then list all tasks.", aliases=["ls"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit id name | description.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done id.", aliases=["complete"])
registry.register("delete", cmd_delete, help_text="Delete a task locally: /delete id.", aliases=["rm"])
registry.register("sync", cmd_sync, help_text="Push tasks that are not synced yet.")
registry.register("status", cmd_status, help_text="Show task counts and remote status.")
