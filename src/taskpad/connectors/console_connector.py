# src/taskpad/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Awaitable, Callable

from ..cli.commands import CommandEmitter, board_text
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]


def _deliver(fut: asyncio.Future[str], line: str | None, exc: BaseException | None) -> None:
    if fut.done():
        return
    if exc is not None:
        fut.set_exception(exc)
    else:
        fut.set_result(line or "")


async def read_stdin(prompt: str) -> str:
    """
    Read one line without blocking the event loop.

    input() runs on a daemon thread, not in the default executor: a read that is
    still pending at Ctrl+C must not keep asyncio.run() from shutting down.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _worker() -> None:
        line: str | None = None
        exc: BaseException | None = None
        try:
            line = input(prompt)
        except BaseException as e:  # EOFError mostly; re-raised in the loop
            exc = e
        # Loop may already be closed if the app exited while we were blocked.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_deliver, fut, line, exc)

    threading.Thread(target=_worker, name="taskpad-stdin", daemon=True).start()
    return await fut


def handle_line(state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
    """
    Turn one console line into an intent.

    - "/..."       -> slash command
    - plain text   -> save it into the task being edited, or add a new task
    - empty line   -> while editing: save the draft unchanged; otherwise nothing

    Returns a reply to print, or None.
    """
    store = state.store

    if line.startswith("/"):
        try:
            return command_registry.handle(state, line, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            return "Internal error while handling a command."

    editing = store.editing_id
    if editing is not None:
        if line.strip():
            store.update_edit_buffer(line)
        store.commit_edit(editing)
        return None

    if not line.strip():
        return None

    store.add(line)
    return None


async def run_console_loop(state: AppState, *, read_line: LineReader | None = None) -> None:
    reader = read_line or read_stdin

    def emit(text: str) -> None:
        print(text, flush=True)

    logger.info("Console connector started.")
    print("Type a task and press Enter to add it. Use /help for commands, /exit to quit.\n")
    print(board_text(state))

    while True:
        try:
            raw = await reader("\n> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except (KeyboardInterrupt, asyncio.CancelledError):
            # Ctrl+C under asyncio.run() arrives as cancellation of the main task.
            logger.info("Console interrupted, exiting.")
            print()
            break

        line = raw.rstrip("\r\n")
        if line.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        before = state.store.views()
        reply = handle_line(state, line.strip() if line.startswith("/") else line, emit=emit)
        if reply is not None:
            print(reply)
        if state.store.views() != before:
            print(board_text(state))

    await state.saves.flush()
    logger.info("Console connector finished.")
