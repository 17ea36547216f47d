from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

from taskboard.domain.entities import TaskEntity
from taskboard.domain.enums import TaskStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    task: TaskEntity


@dataclass(frozen=True)
class DragOverColumn:
    task: TaskEntity
    target: TaskStatus


DragState = Union[Idle, Dragging, DragOverColumn]
StatusChangeHandler = Callable[[str, TaskStatus], object]


class DragController:
    """Turns a drag gesture on the board into at most one status change.

    Input widgets forward their events here; the controller never touches
    them back. Every gesture ends in ``Idle`` whether it was dropped or
    cancelled.
    """

    def __init__(self, on_status_change: StatusChangeHandler) -> None:
        self._on_status_change = on_status_change
        self._state: DragState = Idle()

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def dragged_task(self) -> TaskEntity | None:
        if isinstance(self._state, (Dragging, DragOverColumn)):
            return self._state.task
        return None

    def drag_start(self, task: TaskEntity) -> None:
        self._state = Dragging(task)

    def drag_enter(self, status: TaskStatus | str) -> None:
        task = self.dragged_task
        if task is None:
            return
        self._state = DragOverColumn(task, TaskStatus(status))

    def drag_leave(self, status: TaskStatus | str) -> None:
        state = self._state
        if isinstance(state, DragOverColumn) and state.target == TaskStatus(status):
            self._state = Dragging(state.task)

    def drop(self, status: TaskStatus | str | None = None) -> bool:
        state = self._state
        self._state = Idle()
        if isinstance(state, Idle):
            return False

        if status is not None:
            target = TaskStatus(status)
        elif isinstance(state, DragOverColumn):
            target = state.target
        else:
            logger.debug("Drop without a column for task id=%s", state.task.id)
            return False

        if state.task.status == target:
            return False
        self._on_status_change(state.task.id, target)
        return True

    def drag_end(self) -> None:
        self._state = Idle()

    def can_drop(self, status: TaskStatus | str) -> bool:
        task = self.dragged_task
        return task is not None and task.status != TaskStatus(status)

    def is_drag_over(self, status: TaskStatus | str) -> bool:
        state = self._state
        return isinstance(state, DragOverColumn) and state.target == TaskStatus(status)
