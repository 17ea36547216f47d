from __future__ import annotations

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
)

from taskboard.domain.entities import TaskEntity
from taskboard.domain.enums import BOARD_COLUMNS, TaskPriority
from taskboard.domain.validation import TaskFormError, form_from_task, parse_task_form
from taskboard.services.task_service import TaskService


class TaskFormDialog(QDialog):
    """Create or edit a task. Validation errors are shown inline."""

    def __init__(self, service: TaskService, task: TaskEntity | None = None, parent=None):
        super().__init__(parent)
        self.service = service
        self.task = task
        self.setWindowTitle("Edit Task" if task else "Create New Task")
        self.setObjectName("TaskFormDialog")
        self.setMinimumWidth(420)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Enter task title")
        self.title_input.textChanged.connect(self._clear_errors)

        self.error_label = QLabel("")
        self.error_label.setProperty("class", "field-error")
        self.error_label.hide()

        self.description_input = QTextEdit()
        self.description_input.setPlaceholderText("Enter task description")
        self.description_input.setMaximumHeight(120)

        self.status_combo = QComboBox()
        for status in BOARD_COLUMNS:
            self.status_combo.addItem(status.value, status.value)

        self.priority_combo = QComboBox()
        for priority in TaskPriority:
            self.priority_combo.addItem(priority.value, priority.value)

        self.assignee_input = QLineEdit()
        self.assignee_input.setPlaceholderText("Enter assignee name")

        self.due_toggle = QCheckBox("Due date")
        self.due_input = QDateEdit()
        self.due_input.setCalendarPopup(True)
        self.due_input.setDisplayFormat("yyyy-MM-dd")
        self.due_input.setDate(QDate.currentDate())
        self.due_input.setEnabled(False)
        self.due_toggle.toggled.connect(self.due_input.setEnabled)

        form = QFormLayout()
        form.addRow("Title *", self.title_input)
        form.addRow("", self.error_label)
        form.addRow("Description", self.description_input)
        form.addRow("Status", self.status_combo)
        form.addRow("Priority", self.priority_combo)
        form.addRow("Assignee", self.assignee_input)
        due_row = QHBoxLayout()
        due_row.addWidget(self.due_toggle)
        due_row.addWidget(self.due_input, 1)
        form.addRow(due_row)

        self.submit_button = QPushButton("Update Task" if task else "Create Task")
        self.submit_button.clicked.connect(self.submit)
        cancel_button = QPushButton("Cancel")
        cancel_button.setProperty("variant", "ghost")
        cancel_button.clicked.connect(self.reject)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(cancel_button)
        buttons.addWidget(self.submit_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)
        layout.addLayout(form)
        layout.addLayout(buttons)

        if task:
            self._populate(task)

    def _populate(self, task: TaskEntity) -> None:
        raw = form_from_task(task)
        self.title_input.setText(raw["title"])
        self.description_input.setPlainText(raw["description"])
        self.status_combo.setCurrentIndex(self.status_combo.findData(raw["status"]))
        self.priority_combo.setCurrentIndex(self.priority_combo.findData(raw["priority"]))
        self.assignee_input.setText(raw["assignee"])
        if task.due_date:
            self.due_toggle.setChecked(True)
            self.due_input.setDate(QDate(task.due_date.year, task.due_date.month, task.due_date.day))

    def raw_form(self) -> dict[str, str]:
        return {
            "title": self.title_input.text(),
            "description": self.description_input.toPlainText(),
            "status": self.status_combo.currentData(),
            "priority": self.priority_combo.currentData(),
            "assignee": self.assignee_input.text(),
            "due_date": self.due_input.date().toString("yyyy-MM-dd") if self.due_toggle.isChecked() else "",
        }

    def submit(self) -> None:
        try:
            data = parse_task_form(self.raw_form())
        except TaskFormError as exc:
            self._show_errors(exc.errors)
            return

        if self.task is None:
            self.service.add_task(data)
        else:
            self.service.update_task(self.task.id, data)
        self.accept()

    def _show_errors(self, errors: dict[str, str]) -> None:
        self.error_label.setText("\n".join(errors.values()))
        self.error_label.show()
        if "title" in errors:
            self.title_input.setFocus()

    def _clear_errors(self) -> None:
        if self.error_label.isVisible():
            self.error_label.hide()
