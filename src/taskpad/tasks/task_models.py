# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False


@dataclass(slots=True, frozen=True)
class TaskView:
    """
    What the UI renders for one row.

    is_editing/edit_buffer come from the store's single global edit mode,
    so at most one view in a list has is_editing=True.
    """

    id: str
    text: str
    completed: bool
    is_editing: bool
    edit_buffer: str | None


class TaskEventKind(StrEnum):
    ADDED = "added"
    CHANGED = "changed"
    REMOVED = "removed"
    EDIT = "edit"  # edit mode moved / buffer changed; no record was touched
    RESET = "reset"  # whole list replaced (startup restore)


@dataclass(slots=True, frozen=True)
class TaskEvent:
    """
    Store notification.

    task is a copy of the affected record (the removed record for REMOVED),
    index is its position at the time of the event. Both are None for RESET.
    """

    kind: TaskEventKind
    task: Task | None = None
    index: int | None = None
