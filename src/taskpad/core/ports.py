# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store and the gateway depend on Protocols instead of concrete implementations.
This keeps the durable backend swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from ..tasks.task_models import Task, TaskEvent

TaskListener = Callable[[TaskEvent], None]


class KeyValueStorage(Protocol):
    """
    Durable string key-value storage (AsyncStorage-like).

    get_item returns None when the key has never been written.
    Both methods may raise on I/O failure; callers decide how to recover.
    """

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...


class SnapshotSink(Protocol):
    """Where the store hands the full task list after every mutation."""

    def submit(self, tasks: Sequence[Task]) -> None: ...
