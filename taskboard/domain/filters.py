from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .entities import TaskEntity
from .enums import TaskPriority, TaskStatus

FILTER_KEYS = ("status", "priority", "search")


@dataclass(frozen=True)
class TaskFilters:
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    search: str | None = None

    def is_empty(self) -> bool:
        return self.status is None and self.priority is None and not self.search


def matches(task: TaskEntity, filters: TaskFilters) -> bool:
    if filters.status is not None and task.status != filters.status:
        return False
    if filters.priority is not None and task.priority != filters.priority:
        return False
    if filters.search and filters.search.lower() not in task.title.lower():
        return False
    return True


def filter_tasks(tasks: Iterable[TaskEntity], filters: TaskFilters) -> list[TaskEntity]:
    return [task for task in tasks if matches(task, filters)]
