from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from taskboard.domain.entities import TaskEntity
from taskboard.domain.filters import TaskFilters, filter_tasks

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    return uuid.uuid4().hex


class InMemoryTaskRepository:
    """Ordered task collection kept in process memory.

    Ids and timestamps are assigned here, the way a database would fill
    defaults. Nothing survives the process.
    """

    def __init__(
        self,
        clock: Clock = utcnow,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._tasks: list[TaskEntity] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def list_tasks(self, filters: TaskFilters | None = None) -> list[TaskEntity]:
        if filters is None:
            return list(self._tasks)
        return filter_tasks(self._tasks, filters)

    def get_task(self, task_id: str) -> Optional[TaskEntity]:
        index = self._index_of(task_id)
        return self._tasks[index] if index is not None else None

    def create_task(self, data: dict) -> TaskEntity:
        task_id = self._id_factory()
        while self._index_of(task_id) is not None:
            task_id = self._id_factory()
        now = self._clock()
        task = TaskEntity(id=task_id, created_at=now, updated_at=now, **data)
        self._tasks.append(task)
        return task

    def update_task(self, task_id: str, data: dict) -> Optional[TaskEntity]:
        index = self._index_of(task_id)
        if index is None:
            return None
        task = self._tasks[index]
        updated_at = self._clock()
        if updated_at <= task.updated_at:
            updated_at = task.updated_at + timedelta(microseconds=1)
        updated = replace(task, **data, updated_at=updated_at)
        self._tasks[index] = updated
        return updated

    def delete_task(self, task_id: str) -> bool:
        index = self._index_of(task_id)
        if index is None:
            return False
        del self._tasks[index]
        return True

    def _index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None
