# tests/test_transitions.py

from __future__ import annotations

import pytest

from taskpad.tasks.task_models import Task
from taskpad.tasks.task_store import TaskStore
from taskpad.ui.presenter import format_board, render_rows
from taskpad.ui.transitions import FadeTracker

from .fakes import ManualClock


@pytest.fixture()
def fade_clock() -> ManualClock:
    return ManualClock(100.0)


def test_new_task_fades_in(fade_clock) -> None:
    store = TaskStore()
    fader = FadeTracker(duration_ms=500, clock=fade_clock)
    fader.attach(store)

    t = store.add("a")
    assert fader.opacity(t.id) == pytest.approx(0.0)

    fade_clock.advance(0.25)
    assert fader.opacity(t.id) == pytest.approx(0.5)

    fade_clock.advance(0.25)
    assert fader.opacity(t.id) == pytest.approx(1.0)
    fader.tick()
    assert fader.is_animating() is False


def test_delete_is_immediate_and_ghost_fades_out(fade_clock) -> None:
    removed: list[str] = []
    store = TaskStore()
    fader = FadeTracker(duration_ms=500, clock=fade_clock, on_removed=removed.append)
    fader.attach(store)

    a = store.add("a")
    b = store.add("b")
    fade_clock.advance(1.0)
    fader.tick()

    store.delete(a.id)

    # Data layer does not wait for the animation.
    assert [t.id for t in store.tasks()] == [b.id]

    rows = render_rows(store, fader)
    assert [(r.view.id, r.ghost) for r in rows] == [(a.id, True), (b.id, False)]
    assert rows[0].opacity == pytest.approx(1.0)

    fade_clock.advance(0.5)
    rows = render_rows(store, fader)
    assert [r.view.id for r in rows] == [b.id]
    assert removed == [a.id]


def test_restored_tasks_are_fully_visible(fade_clock) -> None:
    store = TaskStore()
    fader = FadeTracker(duration_ms=500, clock=fade_clock)
    fader.attach(store)

    store.add("in flight")
    store.restore([Task("1", "a"), Task("2", "b", True)])

    assert fader.opacity("1") == 1.0
    assert fader.is_animating() is False


def test_zero_duration_means_no_animation(fade_clock) -> None:
    store = TaskStore()
    fader = FadeTracker(duration_ms=0, clock=fade_clock)
    fader.attach(store)

    t = store.add("a")
    assert fader.opacity(t.id) == 1.0

    store.delete(t.id)
    assert render_rows(store, fader) == []


def test_board_marks_completed_editing_and_ghost_rows(fade_clock) -> None:
    store = TaskStore()
    fader = FadeTracker(duration_ms=500, clock=fade_clock)
    fader.attach(store)

    a = store.add("Buy milk")
    b = store.add("Call mom")
    c = store.add("Gone soon")
    store.toggle(b.id)
    store.begin_edit(a.id)
    store.update_edit_buffer("Buy oat milk")
    store.delete(c.id)

    text = format_board(render_rows(store, fader), title="Todo")
    lines = text.splitlines()

    assert lines[0] == "Todo"
    assert "> Buy oat milk_" in lines[1]
    assert lines[2].startswith("  2. [x] Call mom")
    assert "(Undo)" in lines[2]
    assert lines[3].startswith("   - [ ] Gone soon")


def test_empty_board_has_hint() -> None:
    assert "no tasks yet" in format_board([])


def test_rows_deleted_during_fade_keep_their_order(fade_clock) -> None:
    store = TaskStore()
    fader = FadeTracker(duration_ms=500, clock=fade_clock)
    fader.attach(store)

    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    d = store.add("d")
    fade_clock.advance(1.0)

    store.delete(a.id)
    store.delete(b.id)
    assert [r.view.text for r in render_rows(store, fader)] == ["a", "b", "c", "d"]

    store.delete(d.id)
    store.delete(c.id)
    rows = render_rows(store, fader)
    assert [r.view.text for r in rows] == ["a", "b", "c", "d"]
    assert all(r.ghost for r in rows)
