from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable

from taskboard.domain.entities import READONLY_FIELDS, REQUIRED_FIELDS, TaskEntity
from taskboard.domain.enums import BOARD_COLUMNS, TaskPriority, TaskStatus
from taskboard.domain.filters import FILTER_KEYS, TaskFilters
from taskboard.infra.repository import InMemoryTaskRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardSnapshot:
    tasks: tuple[TaskEntity, ...]
    filters: TaskFilters


Listener = Callable[[BoardSnapshot], None]


class TaskService:
    """Owns the board's tasks and the active filter criteria.

    Every write notifies subscribers synchronously once it has completed,
    so a listener always sees the state the write produced.
    """

    def __init__(self, repo: InMemoryTaskRepository | None = None) -> None:
        self._repo = repo if repo is not None else InMemoryTaskRepository()
        self._filters = TaskFilters()
        self._listeners: list[Listener] = []

    @property
    def filters(self) -> TaskFilters:
        return self._filters

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(tasks=tuple(self._repo.list_tasks()), filters=self._filters)

    def list_tasks(self) -> list[TaskEntity]:
        return self._repo.list_tasks()

    def get_task(self, task_id: str) -> TaskEntity | None:
        return self._repo.get_task(task_id)

    def add_task(self, data: dict) -> TaskEntity:
        normalized = self._normalize_data(data)
        missing = [key for key in REQUIRED_FIELDS if normalized.get(key) is None]
        if missing:
            raise TypeError(f"Missing task fields: {', '.join(missing)}")
        task = self._repo.create_task(normalized)
        logger.debug("Task created id=%s status=%s", task.id, task.status.value)
        self._notify()
        return task

    def update_task(self, task_id: str, data: dict) -> TaskEntity | None:
        normalized = self._normalize_data(data)
        for key in REQUIRED_FIELDS:
            if key in normalized and normalized[key] is None:
                del normalized[key]
        task = self._repo.update_task(task_id, normalized)
        if task is None:
            logger.debug("Update skipped, no task id=%s", task_id)
        else:
            logger.debug("Task updated id=%s fields=%s", task_id, sorted(normalized))
        self._notify()
        return task

    def delete_task(self, task_id: str) -> None:
        if self._repo.delete_task(task_id):
            logger.debug("Task deleted id=%s", task_id)
        else:
            logger.debug("Delete skipped, no task id=%s", task_id)
        self._notify()

    def move_task(self, task_id: str, status: TaskStatus | str) -> TaskEntity | None:
        task = self._repo.get_task(task_id)
        if task is None:
            return None
        status = TaskStatus(status)
        if task.status == status:
            return task
        return self.update_task(task_id, {"status": status})

    def set_filter(self, key: str, value: Any) -> None:
        if key not in FILTER_KEYS:
            raise ValueError(f"Unknown filter: {key}")
        if value is None or value == "":
            value = None
        elif key == "status":
            value = TaskStatus(value)
        elif key == "priority":
            value = TaskPriority(value)
        self._filters = replace(self._filters, **{key: value})
        self._notify()

    def clear_filters(self) -> None:
        self._filters = TaskFilters()
        self._notify()

    def has_active_filters(self) -> bool:
        return not self._filters.is_empty()

    def get_filtered_tasks(self) -> list[TaskEntity]:
        return self._repo.list_tasks(self._filters)

    def tasks_by_status(self) -> dict[TaskStatus, list[TaskEntity]]:
        columns: dict[TaskStatus, list[TaskEntity]] = {status: [] for status in BOARD_COLUMNS}
        for task in self.get_filtered_tasks():
            columns[task.status].append(task)
        return columns

    @staticmethod
    def available_moves(task: TaskEntity) -> list[TaskStatus]:
        return [status for status in BOARD_COLUMNS if status != task.status]

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _normalize_data(self, data: dict) -> dict:
        normalized = {key: value for key, value in data.items() if key not in READONLY_FIELDS}
        if normalized.get("status") is not None:
            normalized["status"] = TaskStatus(normalized["status"])
        if normalized.get("priority") is not None:
            normalized["priority"] = TaskPriority(normalized["priority"])
        return normalized
