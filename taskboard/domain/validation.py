from __future__ import annotations

from datetime import date
from typing import Any

from .entities import TaskEntity
from .enums import TaskPriority, TaskStatus

TITLE_MAX_LENGTH = 100


class TaskFormError(ValueError):
    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


def parse_task_form(raw: dict[str, Any]) -> dict[str, Any]:
    """Validate raw form input and turn it into store data.

    Optional text fields left blank come back as ``None`` so the store treats
    them as absent. Raises :class:`TaskFormError` with one message per field.
    """
    errors: dict[str, str] = {}

    title = (raw.get("title") or "").strip()
    if not title:
        errors["title"] = "Title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = "Title must be less than 100 characters"

    status = _parse_choice(raw.get("status"), TaskStatus, TaskStatus.TO_DO)
    if status is None:
        errors["status"] = "Invalid status"

    priority = _parse_choice(raw.get("priority"), TaskPriority, TaskPriority.MEDIUM)
    if priority is None:
        errors["priority"] = "Invalid priority"

    due_date = None
    due_raw = raw.get("due_date")
    if isinstance(due_raw, date):
        due_date = due_raw
    elif due_raw and str(due_raw).strip():
        due_date = _parse_date(str(due_raw).strip())
        if due_date is None:
            errors["due_date"] = "Invalid date"

    if errors:
        raise TaskFormError(errors)

    return {
        "title": title,
        "description": _blank_to_none(raw.get("description")),
        "status": status,
        "priority": priority,
        "assignee": _blank_to_none(raw.get("assignee")),
        "due_date": due_date,
    }


def form_from_task(task: TaskEntity) -> dict[str, str]:
    return {
        "title": task.title,
        "description": task.description or "",
        "status": task.status.value,
        "priority": task.priority.value,
        "assignee": task.assignee or "",
        "due_date": task.due_date.isoformat() if task.due_date else "",
    }


def _parse_choice(value, enum_cls, default):
    if value is None or value == "":
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
