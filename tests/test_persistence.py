# tests/test_persistence.py

from __future__ import annotations

import asyncio
import json
import logging

import pytest

from taskpad.tasks.codec import TaskBlobError, decode_tasks, encode_tasks
from taskpad.tasks.persistence import PersistenceGateway, SaveQueue
from taskpad.tasks.task_models import Task
from taskpad.tasks.task_store import TaskStore

from .fakes import MemoryKeyValueStorage


def _fields(tasks: list[Task]) -> list[tuple[str, str, bool]]:
    return [(t.id, t.text, t.completed) for t in tasks]


@pytest.mark.asyncio
async def test_save_then_load_round_trip(kv) -> None:
    gateway = PersistenceGateway(kv)
    tasks = [Task("1", "Buy milk"), Task("2", "Café ☕", True), Task("3", "  spaced  ")]

    assert await gateway.save(tasks) is True
    loaded = await gateway.load()

    assert _fields(loaded) == _fields(tasks)
    assert list(kv.items) == ["tasks"]


@pytest.mark.asyncio
async def test_blob_layout_is_plain_json_array(kv) -> None:
    gateway = PersistenceGateway(kv, key="my-tasks")
    await gateway.save([Task("1", "a", True)])

    assert json.loads(kv.items["my-tasks"]) == [{"id": "1", "text": "a", "completed": True}]


@pytest.mark.asyncio
async def test_load_missing_key_is_empty(kv) -> None:
    assert await PersistenceGateway(kv).load() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("blob", ["{not json", '{"id": "1"}', "42", ""])
async def test_load_corrupt_blob_is_empty_and_logged(blob, caplog) -> None:
    kv = MemoryKeyValueStorage({"tasks": blob})
    with caplog.at_level(logging.ERROR):
        assert await PersistenceGateway(kv).load() == []
    assert "Failed to load the tasks" in caplog.text


@pytest.mark.asyncio
async def test_read_failure_after_saving_three_tasks(kv) -> None:
    gateway = PersistenceGateway(kv)
    await gateway.save([Task("1", "a"), Task("2", "b"), Task("3", "c")])

    kv.fail_reads = True
    store = TaskStore()
    store.restore(await gateway.load())

    assert store.tasks() == []


@pytest.mark.asyncio
async def test_extra_fields_are_ignored_and_presentation_state_not_restored() -> None:
    blob = json.dumps(
        [
            {"id": "1", "text": "a", "completed": False, "opacity": 0, "item": "x"},
            {"id": "2", "text": "b", "completed": True},
            "garbage",
            {"text": "no id"},
        ]
    )
    kv = MemoryKeyValueStorage({"tasks": blob})

    loaded = await PersistenceGateway(kv).load()

    assert _fields(loaded) == [("1", "a", False), ("2", "b", True)]
    assert not hasattr(loaded[0], "opacity")


@pytest.mark.asyncio
async def test_write_failure_is_reported_not_raised(kv) -> None:
    kv.fail_writes = True
    gateway = PersistenceGateway(kv)

    assert await gateway.save([Task("1", "a")]) is False
    assert kv.items == {}


@pytest.mark.asyncio
async def test_store_keeps_state_when_writes_fail(kv) -> None:
    kv.fail_writes = True
    saves = SaveQueue(PersistenceGateway(kv))
    store = TaskStore(saves)

    t = store.add("a")
    store.toggle(t.id)
    await saves.flush()

    assert _fields(store.tasks()) == [(t.id, "a", True)]
    assert kv.writes == []
    assert saves.has_pending is False


@pytest.mark.asyncio
async def test_store_mutations_end_up_in_storage(kv) -> None:
    saves = SaveQueue(PersistenceGateway(kv))
    store = TaskStore(saves)

    a = store.add("a")
    b = store.add("b")
    store.add("c")
    store.toggle(a.id)
    store.delete(b.id)
    await saves.flush()

    loaded = await PersistenceGateway(kv).load()
    assert _fields(loaded) == _fields(store.tasks())


@pytest.mark.asyncio
async def test_save_queue_never_reorders_and_keeps_latest(kv) -> None:
    kv.gate = asyncio.Event()
    saves = SaveQueue(PersistenceGateway(kv))

    saves.submit([Task("1", "first")])
    await asyncio.sleep(0)  # first write is now in flight, held by the gate

    saves.submit([Task("1", "second")])
    saves.submit([Task("1", "third")])

    kv.gate.set()
    await saves.flush()

    written = [decode_tasks(v)[0].text for _, v in kv.writes]
    assert written == ["first", "third"]
    assert decode_tasks(kv.items["tasks"])[0].text == "third"


def test_save_queue_outside_event_loop_waits_for_flush(kv) -> None:
    saves = SaveQueue(PersistenceGateway(kv))
    saves.submit([Task("1", "a")])

    assert saves.has_pending is True
    assert kv.writes == []

    asyncio.run(saves.flush())

    assert saves.has_pending is False
    assert _fields(decode_tasks(kv.items["tasks"])) == [("1", "a", False)]


def test_codec_rejects_non_array() -> None:
    with pytest.raises(TaskBlobError):
        decode_tasks('{"tasks": []}')


def test_codec_keeps_order_and_unicode() -> None:
    blob = encode_tasks([Task("b", "ß"), Task("a", "日本")])
    assert "日本" in blob
    assert [t.id for t in decode_tasks(blob)] == ["b", "a"]
