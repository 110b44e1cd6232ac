# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage -> gateway -> save queue -> store -> fade tracker into AppState,
- restores saved tasks once at startup.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..tasks.kv_storage import SqliteKeyValueStorage
from ..tasks.persistence import PersistenceGateway, SaveQueue
from ..tasks.task_store import TaskStore
from ..ui.transitions import FadeTracker

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage: KeyValueStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = SqliteKeyValueStorage(settings.db_path)

    gateway = PersistenceGateway(storage, key=getattr(settings, "storage_key", "tasks"))
    saves = SaveQueue(gateway)
    store = TaskStore(saves)

    fader = FadeTracker(duration_ms=int(getattr(settings, "fade_ms", 500)))
    fader.attach(store)

    return AppState(settings=settings, store=store, gateway=gateway, saves=saves, fader=fader)


async def load_tasks(state: AppState) -> int:
    """Fill the store from durable storage. Failures leave it empty (logged by the gateway)."""
    tasks = await state.gateway.load()
    state.store.restore(tasks)
    return len(tasks)
