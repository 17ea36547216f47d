from __future__ import annotations

from PySide6.QtCore import QPoint, QTimer
from PySide6.QtWidgets import QHBoxLayout, QLabel, QMenu, QMessageBox, QVBoxLayout, QWidget

from taskboard.domain.entities import TaskEntity
from taskboard.domain.enums import BOARD_COLUMNS, TaskStatus
from taskboard.services.drag import DragController
from taskboard.services.task_service import BoardSnapshot, TaskService

from .dialogs import TaskFormDialog
from .widgets import KanbanColumnWidget


class KanbanBoard(QWidget):
    def __init__(self, service: TaskService, parent=None):
        super().__init__(parent)
        self.service = service
        self.drag = DragController(self.service.move_task)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)

        self.columns: dict[TaskStatus, KanbanColumnWidget] = {}
        self.counters: dict[TaskStatus, QLabel] = {}
        for status in BOARD_COLUMNS:
            column = QVBoxLayout()
            header = QHBoxLayout()
            label = QLabel(status.value)
            label.setProperty("class", "panel-title")
            counter = QLabel("0")
            counter.setProperty("class", "stats-badge")
            header.addWidget(label)
            header.addStretch()
            header.addWidget(counter)

            list_widget = KanbanColumnWidget(
                status,
                self.drag,
                on_hover_changed=self.update_highlights,
                on_task_menu=self.show_task_menu,
                on_task_open=self.edit_task,
            )
            list_widget.setObjectName("KanbanList")
            column.addLayout(header)
            column.addWidget(list_widget)
            layout.addLayout(column, 1)
            self.columns[status] = list_widget
            self.counters[status] = counter

        self._unsubscribe = self.service.subscribe(self._on_store_changed)
        self.destroyed.connect(lambda *_: self._unsubscribe())
        self.refresh()

    def refresh(self) -> None:
        for status, tasks in self.service.tasks_by_status().items():
            self.columns[status].set_tasks(tasks)
            self.counters[status].setText(str(len(tasks)))
        self.update_highlights()

    def update_highlights(self) -> None:
        for status, list_widget in self.columns.items():
            list_widget.set_highlighted(self.drag.is_drag_over(status) and self.drag.can_drop(status))

    def show_task_menu(self, task: TaskEntity, global_pos: QPoint) -> None:
        menu = QMenu(self)
        for status in self.service.available_moves(task):
            action = menu.addAction(f"Move to {status.value}")
            action.triggered.connect(lambda _=False, s=status: self.service.move_task(task.id, s))
        menu.addSeparator()
        menu.addAction("Edit").triggered.connect(lambda: self.edit_task(task))
        menu.addAction("Delete").triggered.connect(lambda: self.delete_task(task))
        menu.exec(global_pos)

    def edit_task(self, task: TaskEntity) -> None:
        current = self.service.get_task(task.id)
        if current is None:
            return
        TaskFormDialog(self.service, current, self).exec()

    def delete_task(self, task: TaskEntity) -> None:
        confirm = QMessageBox.question(
            self,
            "Are you sure?",
            f'This action cannot be undone. This will permanently delete the task "{task.title}".',
        )
        if confirm != QMessageBox.Yes:
            return
        self.service.delete_task(task.id)

    def _on_store_changed(self, snapshot: BoardSnapshot) -> None:
        # A drop fires while the source column is still inside QDrag.exec.
        QTimer.singleShot(0, self.refresh)
