# src/taskpad/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores saved tasks, then runs the
console connector until /exit, EOF or Ctrl+C. Pending writes are flushed
before the process exits.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, load_tasks
from ..config import get_settings
from ..connectors.console_connector import LineReader, run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(state: AppState, *, read_line: LineReader | None = None) -> None:
    total = await load_tasks(state)
    logger.debug("Startup restore done total=%s", total)
    try:
        await run_console_loop(state, read_line=read_line)
    finally:
        await state.saves.flush()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_run(state))
    except KeyboardInterrupt:
        # The console already left its loop and flushed; asyncio.run re-raises Ctrl+C here.
        logger.info("Interrupted.")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
