# src/taskpad/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..ui.presenter import format_board, render_rows

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /done, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other line adds a task (or saves the task being edited).")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_id(state: AppState, token: str) -> str | None:
    """
    Map a user reference to a task id.

    Accepts a 1-based row number as shown by /list, or a raw task id.
    """
    views = state.store.views()
    if token.isdigit():
        n = int(token)
        if 1 <= n <= len(views):
            return views[n - 1].id
    if state.store.get(token) is not None:
        return token
    return None


def board_text(state: AppState) -> str:
    settings = state.settings
    return format_board(
        render_rows(state.store, state.fader),
        title=str(getattr(settings, "app_name", "taskpad")),
        color=bool(getattr(settings, "color", False)),
    )


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return board_text(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.store.tasks()
    done = sum(1 for t in tasks if t.completed)
    db_path = getattr(state.settings, "db_path", "?")
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({done} done)\n"
        f"  Storage: {db_path} (key={state.gateway.key})\n"
        f"  Pending write: {'yes' if state.saves.has_pending else 'no'}"
    )


def cmd_toggle(state: AppState, args: list[str]) -> str:
    """
    /done N   -> mark task N done (or back to open if it is done already)
    """
    if not args:
        return "Usage: /done N (row number from /list)."

    task_id = resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task {args[0]}."

    state.store.toggle(task_id)
    task = state.store.get(task_id)
    if task is None:
        return f"No task {args[0]}."
    return f"{'Done' if task.completed else 'Reopened'}: {task.text}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit N           -> start editing task N; the next plain line replaces its text
    /edit N new text  -> replace the text right away
    """
    if not args:
        return "Usage: /edit N [new text]."

    task_id = resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task {args[0]}."

    store = state.store
    previous = store.editing_id
    store.begin_edit(task_id)

    if previous is not None and previous != task_id and emit is not None:
        emit("Previous edit discarded.")

    if len(args) > 1:
        store.update_edit_buffer(" ".join(args[1:]))
        store.commit_edit(task_id)
        task = store.get(task_id)
        return f"Saved: {task.text if task else ''}"

    return (
        f"Editing: {store.edit_buffer}\n"
        "Type the new text and press Enter (an empty line keeps the current text)."
    )


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del N (row number from /list)."

    task_id = resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task {args[0]}."

    task = state.store.get(task_id)
    state.store.delete(task_id)
    return f"Deleted: {task.text if task else task_id}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register(
    "done", cmd_toggle, help_text="Mark task N done / undo: /done N.", aliases=["undo", "toggle"]
)
registry.register("edit", cmd_edit, help_text="Edit task N: /edit N [new text].", aliases=["e"])
registry.register("del", cmd_delete, help_text="Delete task N: /del N.", aliases=["rm", "delete"])
registry.register("status", cmd_status, help_text="Show task totals and storage location.")
