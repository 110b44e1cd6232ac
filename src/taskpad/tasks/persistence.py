# src/taskpad/tasks/persistence.py

from __future__ import annotations

"""
Persistence gateway.

Whole-list round trip under a single fixed key:
- load() once at startup
- save() after every mutation, always overwriting (no merge, no versioning)

Both directions are best-effort: failures are logged and never reach the UI.
The in-memory list stays usable even when durability is degraded.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import replace

from ..core.ports import KeyValueStorage
from .codec import TaskBlobError, decode_tasks, encode_tasks
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


class PersistenceGateway:
    def __init__(self, storage: KeyValueStorage, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> list[Task]:
        """
        Read saved tasks.

        Missing key -> [] (first run). Unreadable storage or a corrupt blob
        -> logged, []. Never raises.
        """
        try:
            blob = await self._storage.get_item(self._key)
        except Exception:
            logger.exception("Failed to load the tasks (storage read failed) key=%s", self._key)
            return []

        if blob is None:
            logger.info("No saved tasks under key=%s", self._key)
            return []

        try:
            tasks = decode_tasks(blob)
        except TaskBlobError:
            logger.exception("Failed to load the tasks (corrupt blob) key=%s", self._key)
            return []

        logger.info("Loaded %d task(s) key=%s", len(tasks), self._key)
        return tasks

    async def save(self, tasks: Sequence[Task]) -> bool:
        """Overwrite the saved list. Returns False (after logging) on failure."""
        try:
            blob = encode_tasks(tasks)
            await self._storage.set_item(self._key, blob)
        except Exception:
            logger.exception("Failed to save the tasks key=%s total=%d", self._key, len(tasks))
            return False

        logger.debug("Saved %d task(s) key=%s", len(tasks), self._key)
        return True


class SaveQueue:
    """
    Single-flight writer: "latest collection wins".

    submit() is synchronous and cheap; it remembers only the newest snapshot.
    One drain task writes snapshots one after another, so writes are never
    reordered; snapshots submitted while a write is in flight collapse into
    the next write.

    Outside a running event loop, the snapshot waits for flush().
    """

    def __init__(self, gateway: PersistenceGateway) -> None:
        self._gateway = gateway
        self._pending: list[Task] | None = None
        self._drainer: asyncio.Task[None] | None = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None or (self._drainer is not None and not self._drainer.done())

    def submit(self, tasks: Sequence[Task]) -> None:
        self._pending = [replace(t) for t in tasks]
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        if self._drainer is None or self._drainer.done():
            self._drainer = loop.create_task(self._drain())

    async def _drain(self) -> None:
        while self._pending is not None:
            snapshot = self._pending
            self._pending = None
            await self._gateway.save(snapshot)

    async def flush(self) -> None:
        """Wait until everything submitted so far has been written (or failed)."""
        while True:
            if self._drainer is not None and not self._drainer.done():
                await self._drainer
                continue
            if self._pending is None:
                return
            self._drainer = asyncio.get_running_loop().create_task(self._drain())
