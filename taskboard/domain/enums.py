from __future__ import annotations

from enum import StrEnum


class TaskStatus(StrEnum):
    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TaskPriority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


BOARD_COLUMNS: tuple[TaskStatus, ...] = (
    TaskStatus.TO_DO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.DONE,
)
