# src/taskpad/ui/transitions.py

from __future__ import annotations

"""
Fade-in / fade-out bookkeeping for the task list.

Purely cosmetic: the tracker only listens to store events. A deleted task is
already gone from the store when the fade-out starts; the tracker keeps a
"ghost" copy so the UI can draw it fading at its old position, then forgets it.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..tasks.task_models import Task, TaskEvent, TaskEventKind
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Fade:
    started_at: float
    start: float
    end: float
    duration: float

    def value(self, now: float) -> float:
        if self.duration <= 0:
            return self.end
        p = min(1.0, max(0.0, (now - self.started_at) / self.duration))
        return self.start + (self.end - self.start) * p

    def finished(self, now: float) -> bool:
        return self.duration <= 0 or now - self.started_at >= self.duration


@dataclass(slots=True, frozen=True)
class Ghost:
    task: Task
    index: int  # position in the list at the moment of deletion
    fade: Fade
    seq: int = 0  # deletion order


class FadeTracker:
    def __init__(
        self,
        *,
        duration_ms: int = 500,
        clock: Callable[[], float] = time.monotonic,
        on_removed: Callable[[str], None] | None = None,
    ) -> None:
        self._duration = max(0, int(duration_ms)) / 1000.0
        self._clock = clock
        self._on_removed = on_removed
        self._fades: dict[str, Fade] = {}
        self._ghosts: dict[str, Ghost] = {}
        self._seq = 0

    def attach(self, store: TaskStore) -> Callable[[], None]:
        return store.subscribe(self.handle)

    def handle(self, event: TaskEvent) -> None:
        now = self._clock()

        if event.kind == TaskEventKind.RESET:
            # Restored tasks are shown fully opaque right away.
            self._fades.clear()
            self._ghosts.clear()
            return

        if event.task is None:
            return

        if event.kind == TaskEventKind.ADDED:
            self._fades[event.task.id] = Fade(now, 0.0, 1.0, self._duration)
        elif event.kind == TaskEventKind.REMOVED:
            # Fade out from wherever a running fade-in had got to.
            current = self.opacity(event.task.id)
            self._fades.pop(event.task.id, None)
            self._ghosts[event.task.id] = Ghost(
                task=event.task,
                index=event.index if event.index is not None else 0,
                fade=Fade(now, current, 0.0, self._duration),
                seq=self._seq,
            )
            self._seq += 1

    def opacity(self, task_id: str) -> float:
        ghost = self._ghosts.get(task_id)
        if ghost is not None:
            return ghost.fade.value(self._clock())
        fade = self._fades.get(task_id)
        if fade is None:
            return 1.0
        return fade.value(self._clock())

    def ghosts(self) -> list[Ghost]:
        """Fading-out rows, oldest deletion first."""
        return sorted(self._ghosts.values(), key=lambda g: g.seq)

    def is_animating(self) -> bool:
        return bool(self._fades or self._ghosts)

    def tick(self) -> list[str]:
        """
        Drop finished fades and ghosts.

        Returns ids of ghosts whose fade-out completed (the visible removal);
        on_removed is called for each of them.
        """
        now = self._clock()

        for task_id in [k for k, f in self._fades.items() if f.finished(now)]:
            del self._fades[task_id]

        removed = [k for k, g in self._ghosts.items() if g.fade.finished(now)]
        for task_id in removed:
            del self._ghosts[task_id]
            if self._on_removed is not None:
                try:
                    self._on_removed(task_id)
                except Exception:
                    logger.exception("on_removed callback failed id=%s", task_id)
        return removed
