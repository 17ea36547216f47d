from __future__ import annotations

from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from taskboard.domain.enums import BOARD_COLUMNS, TaskPriority
from taskboard.services.task_service import BoardSnapshot, TaskService

from .dialogs import TaskFormDialog
from .kanban import KanbanBoard


class MainWindow(QWidget):
    def __init__(self, service: TaskService):
        super().__init__()
        self.setWindowTitle("Task Manager")
        self.resize(1200, 760)

        self.service = service

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        title_box = QVBoxLayout()
        title = QLabel("Task Manager")
        title.setProperty("class", "panel-title")
        subtitle = QLabel("Drag and drop tasks between columns to change their status")
        subtitle.setProperty("class", "task-meta")
        title_box.addWidget(title)
        title_box.addWidget(subtitle)

        add_button = QPushButton("New Task")
        add_button.clicked.connect(self.new_task)

        header.addLayout(title_box)
        header.addStretch()
        header.addWidget(add_button)

        layout.addLayout(header)
        layout.addWidget(self._build_filter_bar())

        self.board = KanbanBoard(self.service)
        layout.addWidget(self.board, 1)

        self._unsubscribe = self.service.subscribe(self._on_store_changed)
        self.destroyed.connect(lambda *_: self._unsubscribe())
        self._sync_filter_bar()

        QShortcut(QKeySequence("Ctrl+N"), self, self.new_task)

    def _build_filter_bar(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("ActionBar")
        row = QHBoxLayout(frame)
        row.setContentsMargins(12, 10, 12, 10)
        row.setSpacing(8)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search tasks...")
        self.search_input.setMinimumWidth(220)
        self.search_input.textChanged.connect(
            lambda text: self.service.set_filter("search", text or None)
        )

        self.status_combo = QComboBox()
        for label, value in [("All Status", ""), *[(s.value, s.value) for s in BOARD_COLUMNS]]:
            self.status_combo.addItem(label, value)
        self.status_combo.currentIndexChanged.connect(
            lambda _: self.service.set_filter("status", self.status_combo.currentData())
        )

        self.priority_combo = QComboBox()
        for label, value in [("All Priority", ""), *[(p.value, p.value) for p in TaskPriority]]:
            self.priority_combo.addItem(label, value)
        self.priority_combo.currentIndexChanged.connect(
            lambda _: self.service.set_filter("priority", self.priority_combo.currentData())
        )

        self.clear_button = QPushButton("Clear")
        self.clear_button.setProperty("variant", "secondary")
        self.clear_button.clicked.connect(lambda: self.service.clear_filters())

        row.addWidget(self.search_input, 1)
        row.addWidget(self.status_combo)
        row.addWidget(self.priority_combo)
        row.addWidget(self.clear_button)
        return frame

    def new_task(self) -> None:
        TaskFormDialog(self.service, parent=self).exec()

    def _on_store_changed(self, snapshot: BoardSnapshot) -> None:
        self._sync_filter_bar()

    def _sync_filter_bar(self) -> None:
        filters = self.service.filters
        widgets = (self.search_input, self.status_combo, self.priority_combo)
        for widget in widgets:
            widget.blockSignals(True)
        try:
            if self.search_input.text() != (filters.search or ""):
                self.search_input.setText(filters.search or "")
            self.status_combo.setCurrentIndex(
                self.status_combo.findData(filters.status.value if filters.status else "")
            )
            self.priority_combo.setCurrentIndex(
                self.priority_combo.findData(filters.priority.value if filters.priority else "")
            )
        finally:
            for widget in widgets:
                widget.blockSignals(False)
        self.clear_button.setVisible(self.service.has_active_filters())
