# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.cli.bootstrap import create_initial_state
from taskpad.core.state import AppState
from taskpad.tasks.task_store import TaskStore

from .fakes import ManualClock, MemoryKeyValueStorage, RecordingSink


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the console layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskpad",
        data_dir=tmp_path,
        db_path=tmp_path / "taskpad.sqlite3",
        storage_key="tasks",
        fade_ms=500,
        color=False,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStorage:
    return MemoryKeyValueStorage()


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def store(sink: RecordingSink, clock: ManualClock) -> TaskStore:
    return TaskStore(sink, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKeyValueStorage) -> AppState:
    """
    AppState wired like the real app, but on in-memory storage.
    """
    return create_initial_state(settings=settings, storage=kv)
