# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.persistence import PersistenceGateway, SaveQueue
from ..tasks.task_store import TaskStore
from ..ui.transitions import FadeTracker


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace).
    settings: Any

    store: TaskStore
    gateway: PersistenceGateway
    saves: SaveQueue
    fader: FadeTracker | None = None
