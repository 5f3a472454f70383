from __future__ import annotations

import logging
from dataclasses import asdict

from .models import Priority, Task
from .schemas import TaskCreate, TaskOut, TaskStats, TaskUpdate

logger = logging.getLogger(__name__)


def _out(task: Task) -> TaskOut:
    return TaskOut.model_validate(asdict(task))


class TaskStore:
    """
    In-memory task list. Owns the fields the parser never produces:
    id, completed flag and creation timestamp.

    Only touched from async handlers on the event loop, so no locking.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def add(self, payload: TaskCreate) -> TaskOut:
        data = payload.model_dump()
        data["priority"] = Priority(data["priority"])
        task = Task(**data)
        self._tasks[task.id] = task
        logger.info("Created task %s: %s", task.id, task.name)
        return _out(task)

    def get(self, task_id: str) -> TaskOut | None:
        task = self._tasks.get(task_id)
        return _out(task) if task else None

    def list_tasks(self, completed: bool | None = None, priority: Priority | None = None) -> list[TaskOut]:
        tasks = list(self._tasks.values())
        if completed is not None:
            tasks = [t for t in tasks if t.completed == completed]
        if priority is not None:
            tasks = [t for t in tasks if t.priority == Priority(priority)]
        return [_out(t) for t in tasks]

    def update(self, task_id: str, payload: TaskUpdate) -> TaskOut | None:
        task = self._tasks.get(task_id)
        if not task:
            return None
        updates = payload.model_dump(exclude_unset=True)
        if updates.get("priority") is not None:
            updates["priority"] = Priority(updates["priority"])
        for k, v in updates.items():
            # explicit nulls leave the field alone
            if v is not None:
                setattr(task, k, v)
        return _out(task)

    def toggle(self, task_id: str) -> TaskOut | None:
        task = self._tasks.get(task_id)
        if not task:
            return None
        task.completed = not task.completed
        return _out(task)

    def delete(self, task_id: str) -> bool:
        return self._tasks.pop(task_id, None) is not None

    def clear(self) -> None:
        self._tasks.clear()

    def stats(self) -> TaskStats:
        tasks = list(self._tasks.values())
        pending = [t for t in tasks if not t.completed]
        return TaskStats(
            total=len(tasks),
            pending=len(pending),
            completed=len(tasks) - len(pending),
            urgent=sum(1 for t in pending if t.priority == Priority.P1),
        )


store = TaskStore()


def get_store() -> TaskStore:
    return store
