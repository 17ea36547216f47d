from __future__ import annotations

from PySide6.QtCore import QMimeData, QSize, Qt
from PySide6.QtGui import QDrag
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from taskboard.domain.entities import TaskEntity
from taskboard.domain.enums import TaskPriority, TaskStatus
from taskboard.services.drag import DragController

PRIORITY_COLORS = {
    TaskPriority.LOW: "#7CC4A1",
    TaskPriority.MEDIUM: "#E0B25B",
    TaskPriority.HIGH: "#E57B63",
}

MIME_PREFIX = "task:"


def _task_id_from_mime(mime: QMimeData) -> str | None:
    if not mime.hasText():
        return None
    text = mime.text()
    if not text.startswith(MIME_PREFIX):
        return None
    return text[len(MIME_PREFIX):] or None


class TaskCardWidget(QWidget):
    def __init__(self, task: TaskEntity):
        super().__init__()
        self.task = task

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setMinimumHeight(64)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(4)

        title = QLabel(task.title)
        title.setProperty("class", "task-title")
        title.setWordWrap(True)
        title.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)

        priority = QLabel(task.priority.value)
        priority.setProperty("class", "task-priority")
        priority.setStyleSheet(f"background-color: {PRIORITY_COLORS.get(task.priority, '#9CA3AF')};")
        priority.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

        header = QHBoxLayout()
        header.setSpacing(8)
        header.addWidget(title, 1)
        header.addWidget(priority, 0, Qt.AlignTop)
        layout.addLayout(header)

        if task.description:
            description = QLabel(task.description)
            description.setProperty("class", "task-description")
            description.setWordWrap(True)
            layout.addWidget(description)

        meta_parts = []
        if task.assignee:
            meta_parts.append(task.assignee)
        if task.due_date:
            meta_parts.append(task.due_date.strftime("%b %d, %Y"))
        if meta_parts:
            meta = QLabel(" | ".join(meta_parts))
            meta.setProperty("class", "task-meta")
            meta.setWordWrap(True)
            layout.addWidget(meta)


class KanbanColumnWidget(QListWidget):
    """One status column. Drag events are forwarded to the shared controller."""

    def __init__(
        self,
        status: TaskStatus,
        drag: DragController,
        on_hover_changed,
        on_task_menu,
        on_task_open,
        parent=None,
    ):
        super().__init__(parent)
        self.status = status
        self._drag = drag
        self._on_hover_changed = on_hover_changed
        self._on_task_menu = on_task_menu
        self._on_task_open = on_task_open
        self._tasks: dict[str, TaskEntity] = {}
        self.setAcceptDrops(True)
        self.setDragEnabled(True)
        self.setDragDropMode(QAbstractItemView.DragDrop)
        self.setDefaultDropAction(Qt.MoveAction)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.setSpacing(8)
        self.customContextMenuRequested.connect(self._show_menu)
        self.itemDoubleClicked.connect(self._open_item)

    def set_tasks(self, tasks: list[TaskEntity]) -> None:
        self.clear()
        self._tasks = {task.id: task for task in tasks}
        for task in tasks:
            item = QListWidgetItem()
            item.setData(Qt.UserRole, task.id)
            widget = TaskCardWidget(task)
            self.addItem(item)
            self.setItemWidget(item, widget)
            item.setSizeHint(widget.sizeHint())
        self.sync_item_sizes()

    def set_highlighted(self, highlighted: bool) -> None:
        self.setProperty("dropTarget", highlighted)
        self.style().unpolish(self)
        self.style().polish(self)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.sync_item_sizes()

    def sync_item_sizes(self) -> None:
        viewport_width = self.viewport().width()
        for index in range(self.count()):
            item = self.item(index)
            widget = self.itemWidget(item)
            if widget:
                widget.setFixedWidth(viewport_width)
                widget.adjustSize()
                item.setSizeHint(QSize(viewport_width, widget.sizeHint().height()))

    def startDrag(self, supportedActions) -> None:  # type: ignore[override]
        item = self.currentItem()
        if not item:
            return
        task = self._tasks.get(item.data(Qt.UserRole))
        if task is None:
            return
        mime = QMimeData()
        mime.setText(f"{MIME_PREFIX}{task.id}")
        drag = QDrag(self)
        drag.setMimeData(mime)
        self._drag.drag_start(task)
        try:
            drag.exec(Qt.MoveAction)
        finally:
            self._drag.drag_end()
            self._on_hover_changed()

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if _task_id_from_mime(event.mimeData()) is None:
            event.ignore()
            return
        self._drag.drag_enter(self.status)
        self._on_hover_changed()
        event.acceptProposedAction()

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        if _task_id_from_mime(event.mimeData()) is not None:
            event.acceptProposedAction()

    def dragLeaveEvent(self, event) -> None:  # type: ignore[override]
        self._drag.drag_leave(self.status)
        self._on_hover_changed()
        event.accept()

    def dropEvent(self, event) -> None:  # type: ignore[override]
        if _task_id_from_mime(event.mimeData()) is None:
            event.ignore()
            return
        self._drag.drop(self.status)
        event.setDropAction(Qt.IgnoreAction)
        event.accept()

    def _show_menu(self, pos) -> None:
        item = self.itemAt(pos)
        if not item:
            return
        task = self._tasks.get(item.data(Qt.UserRole))
        if task is not None:
            self._on_task_menu(task, self.viewport().mapToGlobal(pos))

    def _open_item(self, item: QListWidgetItem) -> None:
        task = self._tasks.get(item.data(Qt.UserRole))
        if task is not None:
            self._on_task_open(task)
