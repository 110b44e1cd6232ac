# src/taskpad/ui/presenter.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import TaskView
from ..tasks.task_store import TaskStore
from .transitions import FadeTracker

DIM = "\033[2m"
STRIKE = "\033[9m"
BOLD = "\033[1m"
RESET = "\033[0m"


@dataclass(slots=True, frozen=True)
class RowView:
    view: TaskView
    opacity: float
    ghost: bool = False  # already deleted, still fading out


def render_rows(store: TaskStore, fader: FadeTracker | None = None) -> list[RowView]:
    """Store views in order, with fading-out ghosts put back at their old positions."""
    views = store.views()
    if fader is None:
        return [RowView(view=v, opacity=1.0) for v in views]

    fader.tick()
    rows = [RowView(view=v, opacity=fader.opacity(v.id)) for v in views]
    # Newest deletion first: each index was taken while older ghosts were already gone.
    for ghost in reversed(fader.ghosts()):
        view = TaskView(
            id=ghost.task.id,
            text=ghost.task.text,
            completed=ghost.task.completed,
            is_editing=False,
            edit_buffer=None,
        )
        pos = min(ghost.index, len(rows))
        rows.insert(pos, RowView(view=view, opacity=fader.opacity(ghost.task.id), ghost=True))
    return rows


def _style(text: str, *codes: str, color: bool) -> str:
    if not color or not codes:
        return text
    return "".join(codes) + text + RESET


def format_row(number: int | None, row: RowView, *, color: bool = False) -> str:
    v = row.view
    label = f"{number:>3}." if number is not None else "   -"
    mark = "[x]" if v.completed else "[ ]"

    if v.is_editing:
        return f"{label} {mark} > {v.edit_buffer or ''}_   (editing: Enter saves)"

    codes: list[str] = []
    if v.completed:
        codes.append(STRIKE)
    if row.opacity < 1.0:
        codes.append(DIM)

    hint = "Undo" if v.completed else "Done"
    body = _style(v.text, *codes, color=color)
    return f"{label} {mark} {body}   ({hint})"


def format_board(rows: list[RowView], *, title: str = "Simple To-Do List", color: bool = False) -> str:
    lines = [_style(title, BOLD, color=color)]
    if not rows:
        lines.append("  (no tasks yet: type something and press Enter)")
        return "\n".join(lines)

    number = 0
    for row in rows:
        if row.ghost:
            lines.append(format_row(None, row, color=color))
            continue
        number += 1
        lines.append(format_row(number, row, color=color))
    return "\n".join(lines)
