# src/taskpad/tasks/task_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import replace

from ..core.ports import SnapshotSink, TaskListener
from .task_models import Task, TaskEvent, TaskEventKind, TaskView

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory ordered task list; the single source of truth for the UI.

    Every mutating method ends by handing a snapshot of the whole list to the
    sink (no diffs). Calls that match nothing (blank add, unknown id, commit on
    a task that is not being edited) change nothing, persist nothing and are
    not logged.

    Edit mode is global: at most one task is being edited. Starting an edit on
    another task drops the previous draft without saving it.
    """

    def __init__(
        self,
        sink: SnapshotSink | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._tasks: list[Task] = []
        self._sink = sink
        self._clock = clock
        self._listeners: list[TaskListener] = []

        self._editing_id: str | None = None
        self._edit_buffer: str = ""
        self._last_id_num = 0

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _new_id(self) -> str:
        """Millisecond timestamp token, bumped until unique and monotonic."""
        num = max(int(self._clock() * 1000), self._last_id_num + 1)
        used = {t.id for t in self._tasks}
        while str(num) in used:
            num += 1
        self._last_id_num = num
        return str(num)

    def _persist(self) -> None:
        if self._sink is None:
            return
        self._sink.submit(self.tasks())

    def _emit(self, kind: TaskEventKind, task: Task | None = None, index: int | None = None) -> None:
        event = TaskEvent(kind=kind, task=replace(task) if task is not None else None, index=index)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Task listener failed on %s", kind.value)

    # ---- queries ----

    def __len__(self) -> int:
        return len(self._tasks)

    def tasks(self) -> list[Task]:
        """Copies of all tasks in display order."""
        return [replace(t) for t in self._tasks]

    def get(self, task_id: str) -> Task | None:
        i = self._index_of(task_id)
        return replace(self._tasks[i]) if i is not None else None

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    @property
    def edit_buffer(self) -> str | None:
        return self._edit_buffer if self._editing_id is not None else None

    def views(self) -> list[TaskView]:
        return [
            TaskView(
                id=t.id,
                text=t.text,
                completed=t.completed,
                is_editing=t.id == self._editing_id,
                edit_buffer=self._edit_buffer if t.id == self._editing_id else None,
            )
            for t in self._tasks
        ]

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register an observer; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ---- intents ----

    def add(self, text: str) -> Task | None:
        """
        Append a new task. The text is stored exactly as typed; the strip()
        is only used to reject blank input.
        """
        if not text or not text.strip():
            return None

        task = Task(id=self._new_id(), text=text, completed=False)
        self._tasks.append(task)
        logger.debug("Task added id=%s total=%s", task.id, len(self._tasks))

        self._emit(TaskEventKind.ADDED, task, len(self._tasks) - 1)
        self._persist()
        return replace(task)

    def toggle(self, task_id: str) -> None:
        i = self._index_of(task_id)
        if i is None:
            return

        task = self._tasks[i]
        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)

        self._emit(TaskEventKind.CHANGED, task, i)
        self._persist()

    def begin_edit(self, task_id: str) -> None:
        i = self._index_of(task_id)
        if i is None:
            return

        if self._editing_id is not None and self._editing_id != task_id:
            # Draft of the previous task is dropped, not saved.
            logger.debug("Edit abandoned id=%s", self._editing_id)

        self._editing_id = task_id
        self._edit_buffer = self._tasks[i].text
        self._emit(TaskEventKind.EDIT, self._tasks[i], i)

    def update_edit_buffer(self, text: str) -> None:
        if self._editing_id is None:
            return
        self._edit_buffer = text
        i = self._index_of(self._editing_id)
        self._emit(TaskEventKind.EDIT, self._tasks[i] if i is not None else None, i)

    def commit_edit(self, task_id: str) -> None:
        if self._editing_id is None or task_id != self._editing_id:
            return

        i = self._index_of(task_id)
        buffer = self._edit_buffer
        self._editing_id = None
        self._edit_buffer = ""
        if i is None:
            return

        task = self._tasks[i]
        task.text = buffer
        logger.debug("Task edited id=%s", task_id)

        self._emit(TaskEventKind.CHANGED, task, i)
        self._persist()

    def delete(self, task_id: str) -> None:
        i = self._index_of(task_id)
        if i is None:
            return

        task = self._tasks.pop(i)
        if self._editing_id == task_id:
            self._editing_id = None
            self._edit_buffer = ""
        logger.debug("Task deleted id=%s total=%s", task_id, len(self._tasks))

        self._emit(TaskEventKind.REMOVED, task, i)
        self._persist()

    # ---- startup ----

    def restore(self, tasks: Iterable[Task]) -> None:
        """
        Replace the list with previously saved records (startup load).

        Does not persist: the data just came from storage. Duplicate ids keep
        the first occurrence.
        """
        restored: list[Task] = []
        seen: set[str] = set()
        for t in tasks:
            if t.id in seen:
                logger.warning("Duplicate task id=%s in saved data; keeping the first one", t.id)
                continue
            seen.add(t.id)
            restored.append(Task(id=t.id, text=t.text, completed=bool(t.completed)))

        self._tasks = restored
        self._editing_id = None
        self._edit_buffer = ""
        logger.info("TaskStore restored total=%s", len(restored))
        self._emit(TaskEventKind.RESET)
