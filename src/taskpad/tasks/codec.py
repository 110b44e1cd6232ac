# src/taskpad/tasks/codec.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskBlobError(ValueError):
    """Stored blob is not a JSON array of task objects."""


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize the whole list as a JSON array of {id, text, completed}."""
    payload = [{"id": t.id, "text": t.text, "completed": bool(t.completed)} for t in tasks]
    return json.dumps(payload, ensure_ascii=False)


def _record_to_task(raw: Any) -> Task | None:
    if not isinstance(raw, dict):
        return None
    task_id = raw.get("id")
    if not isinstance(task_id, str) or not task_id:
        return None
    text = raw.get("text")
    return Task(
        id=task_id,
        text=text if isinstance(text, str) else "",
        completed=raw.get("completed") is True,
    )


def decode_tasks(blob: str) -> list[Task]:
    """
    Parse a stored blob.

    Unknown fields (including any saved presentation state) are ignored.
    Entries that are not objects or lack a string id are skipped.
    Raises TaskBlobError if the blob itself is unusable.
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise TaskBlobError(f"tasks blob is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TaskBlobError(f"tasks blob must be a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    skipped = 0
    for raw in data:
        task = _record_to_task(raw)
        if task is None:
            skipped += 1
            continue
        out.append(task)

    if skipped:
        logger.warning("Skipped %d malformed task record(s) while decoding", skipped)
    return out
